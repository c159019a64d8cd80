from nessy_storage.store.blob_database import BlobDatabase
from nessy_storage.store.roms import RomTable
from nessy_storage.store.saves import SaveTable
from nessy_storage.store.title_screens import TitleScreenTable

__all__ = [
    "BlobDatabase",
    "RomTable",
    "SaveTable",
    "TitleScreenTable",
]
