from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine
from flipcards.utils.config import settings

# IMPORTANTE: Importe os modelos aqui para registrá-los no SQLModel
from flipcards.models.folder import Folder
from flipcards.models.flashcard import Flashcard


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    # Sem isso o sqlite ignora o ON DELETE SET NULL
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(url: str, echo: bool = False):
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # Banco em memória: todas as threads precisam da mesma conexão
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

def init_db(bind=None):
    SQLModel.metadata.create_all(bind or engine)

def get_session():
    with Session(engine) as session:
        yield session
