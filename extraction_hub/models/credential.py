from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from extraction_hub.core.database import Base

CREDENTIAL_TYPES = ("postgresql", "redshift", "oracle", "mysql")

class Credential(Base):
    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    name = Column(String, nullable=False)
    type = Column(String, nullable=False) # 'postgresql' | 'redshift' | 'oracle' | 'mysql'

    host = Column(String, nullable=False)
    port = Column(Integer, nullable=False)
    database_name = Column(String, nullable=False)
    username = Column(String, nullable=False)

    # Stored as submitted. Never serialized back to clients.
    password = Column(String, default="")

    ssl_enabled = Column(Boolean, default=False)

    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)
