from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from kisan_schemes.config import settings


class MongoDB:
    client: AsyncIOMotorClient = None
    database: AsyncIOMotorDatabase = None


db = MongoDB()


async def connect_to_mongo():
    """Create database connection"""
    db.client = AsyncIOMotorClient(settings.mongodb_url)
    db.database = db.client[settings.mongodb_db_name]


async def close_mongo_connection():
    """Close database connection"""
    if db.client:
        db.client.close()


def get_database() -> AsyncIOMotorDatabase:
    return db.database
