from databases import Database
from folio.modules.settings import get_settings
from folio.modules.migration_runner import run_migrations

# Create the database instance
database = Database(get_settings().database_url)

async def connect_to_db():
    await database.connect()

async def disconnect_from_db():
    await database.disconnect()

async def init_db():
    await run_migrations(database)
