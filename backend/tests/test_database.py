import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models
from app.crud import crud_sequence
from app.database import Base, Database, atomic


def setup_db():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    return Session()


def test_database_handle_lifecycle(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'store.db'}")
    assert not database.is_connected
    with pytest.raises(RuntimeError):
        database.session()

    database.connect()
    database.create_schema()
    db = database.session()
    db.add(models.ContactMessage(name="Carl", email="carl@example.com", message="hi"))
    db.commit()
    assert db.query(models.ContactMessage).count() == 1
    db.close()

    database.close()
    assert not database.is_connected


def test_atomic_rolls_back_on_error():
    db = setup_db()
    with pytest.raises(ValueError):
        with atomic(db):
            db.add(models.ContactMessage(name="Carl", message="hi"))
            db.flush()
            raise ValueError("boom")
    assert db.query(models.ContactMessage).count() == 0


def test_sequence_counts_up_from_seed():
    db = setup_db()
    assert crud_sequence.next_value(db, "things", seed=lambda: 10) == 11
    assert crud_sequence.next_value(db, "things", seed=lambda: 999) == 12
    assert crud_sequence.next_value(db, "other") == 1
    db.commit()
    assert db.get(models.Sequence, "things").current_value == 12


def test_sequence_seeded_concurrently_uses_existing_row(monkeypatch):
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)

    # another writer creates the counter after this session looked for it
    other = Session()
    other.add(models.Sequence(name="things", current_value=5))
    other.commit()
    other.close()

    db = Session()
    monkeypatch.setattr(db, "get", lambda *args, **kwargs: None)

    assert crud_sequence.next_value(db, "things", seed=lambda: 0) == 6
    db.commit()
    assert db.query(models.Sequence).filter_by(name="things").one().current_value == 6
