from sqlalchemy import Column, String, Integer, BigInteger, LargeBinary, JSON

from wopihost.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "wopi_documents"

    basename = Column(String(255), index=True, nullable=False)
    owner_id = Column(String(255), nullable=False)
    content = Column(LargeBinary, nullable=False, default=b"")
    size = Column(BigInteger, nullable=False, default=0)
    revision = Column(Integer, nullable=False, default=1)
    lock_id = Column(String(1024), nullable=True)
    last_editors = Column(JSON, nullable=False, default=list)
