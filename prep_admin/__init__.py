# prep_admin/__init__.py


def init_db():
    from prep_admin import models  # noqa
    from prep_admin.db.base import Base
    from prep_admin.db.session import engine

    Base.metadata.create_all(bind=engine)
