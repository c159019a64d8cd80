from nessy_storage.models.rom import RomEntry
from nessy_storage.models.save import SaveEntry
from nessy_storage.models.title_screen import TitleScreenEntry

__all__ = [
    "RomEntry",
    "SaveEntry",
    "TitleScreenEntry",
]
