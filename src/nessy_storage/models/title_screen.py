from sqlmodel import Field, SQLModel


class TitleScreenEntry(SQLModel, table=True):
    __tablename__ = "title_screens"

    rom_hash: str = Field(primary_key=True, max_length=64)
    data: bytes
