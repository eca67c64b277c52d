import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

# postgresql+psycopg://... in production; SQLite file for local runs
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./photos.db")


def engine_connect_args(url: str) -> dict[str, object]:
    # SQLite needs check_same_thread; other drivers reject it
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(DATABASE_URL, connect_args=engine_connect_args(DATABASE_URL))

# PhotoDAO commits explicitly
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
