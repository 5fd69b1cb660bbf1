# File: infrastructure/database/mongodb/mongo_client.py

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from .connection import get_mongo_db
from .repositories.entity_store import EntityStore


def get_entity_store(db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> EntityStore:
    return EntityStore(db)
