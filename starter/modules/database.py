from databases import Database
from starter.core import settings

# Create the database instance
database = Database(settings.DATABASE_URL)

async def connect_to_db():
    await database.connect()

async def disconnect_from_db():
    await database.disconnect()
