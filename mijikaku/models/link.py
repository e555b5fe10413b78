from sqlalchemy import Column, String, Text

from mijikaku.database.connection import Base


class Link(Base):
    """
    A shortened URL.

    Rows are written once at shorten time and never updated or deleted.
    The primary key is the random short code itself, so a repeated code
    is rejected by the database.
    """
    __tablename__ = "urls"

    id = Column(String, primary_key=True)
    url = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Link {self.id} -> {self.url}>"
