from sqlalchemy.orm import DeclarativeBase


# ---------- Declarative Base ----------
class Base(DeclarativeBase):
    pass
