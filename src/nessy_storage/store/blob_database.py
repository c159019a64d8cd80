from __future__ import annotations

from sqlalchemy import Engine

from nessy_storage.database import create_db_and_tables
from nessy_storage.store.roms import RomTable
from nessy_storage.store.saves import SaveTable
from nessy_storage.store.title_screens import TitleScreenTable


class BlobDatabase:
    """The three binary tables sharing one engine.

    Construct once at startup and pass it to every consumer.
    """

    def __init__(self, engine: Engine, *, create_tables: bool = True) -> None:
        if create_tables:
            create_db_and_tables(engine)
        self.engine = engine
        self.roms = RomTable(engine)
        self.saves = SaveTable(engine)
        self.title_screens = TitleScreenTable(engine)

    def close(self) -> None:
        self.engine.dispose()
