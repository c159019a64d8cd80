from sqlmodel import Field, SQLModel


class RomEntry(SQLModel, table=True):
    __tablename__ = "roms"

    hash: str = Field(primary_key=True, max_length=64)
    name: str
    data: bytes
