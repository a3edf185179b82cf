"""
Database connection and operations for the Blink Actions server.
Async SQLite operations using SQLAlchemy and aiosqlite.
"""
import logging
from typing import Optional
from contextlib import asynccontextmanager

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError

from .models import Base, BlinkRecord
from ..actions.errors import DatabaseError
from ..actions.schemas import Blink, CreateBlinkRequest


logger = logging.getLogger(__name__)


class Database:
    """Async database operations for stored blinks."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.engine = None
        self.SessionLocal = None

    async def initialize(self):
        """Initialize the database connection and create tables."""
        try:
            self.engine = create_async_engine(
                f"sqlite+aiosqlite:///{self.db_path}",
                poolclass=StaticPool,
                connect_args={
                    "check_same_thread": False,
                    "timeout": 20  # 20 second timeout
                },
                echo=False  # Set to True for SQL debugging
            )

            self.SessionLocal = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            logger.info(f"Database initialized at {self.db_path}")

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise DatabaseError(f"Database initialization failed: {e}")

    async def close(self):
        """Close database connections."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")

    @asynccontextmanager
    async def get_session(self):
        """Get database session context manager."""
        if not self.SessionLocal:
            raise DatabaseError("Database not initialized")

        async with self.SessionLocal() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logger.error(f"Database session error: {e}")
                raise
            finally:
                await session.close()

    async def insert_blink(self, request: CreateBlinkRequest) -> Blink:
        """Store a new blink and return it with its id and timestamp."""
        try:
            async with self.get_session() as session:
                record = BlinkRecord(
                    title=request.title,
                    icon_url=request.icon_url,
                    description=request.description,
                    label=request.label,
                    wallet_address=request.wallet_address,
                    type=request.type.value,
                    config=request.config,
                )
                session.add(record)
                await session.commit()
                await session.refresh(record)

                logger.info(f"Stored blink {record.id} ({record.type})")
                return Blink(**record.to_dict())

        except SQLAlchemyError as e:
            logger.error(f"Failed to save blink '{request.title}': {e}")
            raise DatabaseError(f"Blink save failed: {e}")

    async def get_blink(self, blink_id: str) -> Optional[Blink]:
        """Get a blink by ID."""
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(BlinkRecord).where(BlinkRecord.id == blink_id)
                )
                record = result.scalar_one_or_none()
                return Blink(**record.to_dict()) if record else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get blink {blink_id}: {e}")
            raise DatabaseError(f"Blink retrieval failed: {e}")

    async def ping(self) -> bool:
        """Check the database answers a trivial query."""
        try:
            async with self.get_session() as session:
                result = await session.execute(text("SELECT 1"))
                row = result.fetchone()
                return bool(row and row[0] == 1)

        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            raise DatabaseError(f"Database ping failed: {e}")


# Global database instance
db = None


async def init_database(db_path: str) -> Database:
    """Initialize the global database instance."""
    global db
    db = Database(db_path)
    await db.initialize()
    return db


async def get_database() -> Database:
    """Get the global database instance."""
    if db is None:
        raise DatabaseError("Database not initialized")
    return db


async def close_database():
    """Close the global database instance."""
    global db
    if db:
        await db.close()
        db = None
