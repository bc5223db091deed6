import uuid

import pytest

from grc.db import models, schemas
from grc.db.repositories import burials as repo_burials
from grc.db.repositories import cemeteries as repo_cemeteries
from grc.db.repositories import covers as repo_covers
from grc.db.repositories import graves as repo_graves
from grc.db.repositories.base import EntityNotFound
from payloads import burial_payload, cemetery_payload, grave_payload

ACTOR = "registrar"


def _cemetery(db, **overrides):
    return repo_cemeteries.create_cemetery(db, schemas.CemeteryCreate(**cemetery_payload(**overrides)), actor=ACTOR)


def _grave(db, **overrides):
    return repo_graves.create_grave(db, schemas.GraveCreate(**grave_payload(**overrides)), actor=ACTOR)


def _burial(db, **overrides):
    return repo_burials.create_burial(db, schemas.BurialCreate(**burial_payload(**overrides)), actor=ACTOR)


def _cover(db, **fields):
    return repo_covers.create_cover(db, schemas.CoverCreate(**fields), actor=ACTOR)


def test_create_grave_in_cemetery(db):
    cemetery = _cemetery(db)
    grave = _grave(db, cemetery_id=str(cemetery.id), reference="A-1")

    assert grave.id is not None
    assert grave.cemetery_id == cemetery.id
    db.refresh(cemetery)
    assert cemetery.grave_ids == [grave.id]


def test_create_grave_with_unknown_cemetery_raises(db):
    missing = uuid.uuid4()
    with pytest.raises(EntityNotFound) as exc:
        _grave(db, cemetery_id=str(missing))
    assert exc.value.object_class == "Cemetery"
    assert exc.value.object_id == missing


def test_create_grave_with_covers_links_both_sides(db):
    cover = _cover(db, reference="slab")
    grave = _grave(db, cover_ids=[str(cover.id)])

    assert grave.cover_ids == [cover.id]
    db.refresh(cover)
    assert cover.grave_ids == [grave.id]


def test_update_grave_fields(db):
    grave = _grave(db)
    updated = repo_graves.update_grave(
        db, grave.id, schemas.GraveUpdate(capacity=4, rulings=["no flowers"]), actor=ACTOR
    )
    assert updated.capacity == 4
    assert updated.rulings == ["no flowers"]
    assert updated.owner == grave.owner


def test_update_missing_grave_returns_none(db):
    assert repo_graves.update_grave(db, uuid.uuid4(), schemas.GraveUpdate(capacity=3), actor=ACTOR) is None


def test_moving_grave_between_cemeteries(db):
    north = _cemetery(db, name="North")
    south = _cemetery(db, name="South")
    grave = _grave(db, cemetery_id=str(north.id))

    repo_graves.update_grave(db, grave.id, schemas.GraveUpdate(cemetery_id=south.id), actor=ACTOR)

    db.refresh(north)
    db.refresh(south)
    assert north.grave_ids == []
    assert south.grave_ids == [grave.id]

    repo_graves.update_grave(db, grave.id, schemas.GraveUpdate(cemetery_id=None), actor=ACTOR)
    db.refresh(south)
    db.refresh(grave)
    assert south.grave_ids == []
    assert grave.cemetery_id is None


def test_update_grave_replaces_cover_set(db):
    first = _cover(db, reference="first")
    second = _cover(db, reference="second")
    grave = _grave(db, cover_ids=[str(first.id)])

    repo_graves.update_grave(db, grave.id, schemas.GraveUpdate(cover_ids=[second.id]), actor=ACTOR)

    db.refresh(first)
    db.refresh(second)
    assert grave.cover_ids == [second.id]
    assert first.grave_ids == []
    assert second.grave_ids == [grave.id]


def test_attach_and_detach_burial(db):
    grave = _grave(db)
    burial = _burial(db)

    repo_graves.attach_burial(db, grave, burial, actor=ACTOR)
    assert grave.burial_ids == [burial.id]
    assert burial.grave_id == grave.id

    repo_graves.detach_burial(db, grave, burial, actor=ACTOR)
    assert grave.burial_ids == []
    db.refresh(burial)
    assert burial.grave_id is None


def test_attaching_burial_elsewhere_prunes_old_grave(db):
    first = _grave(db, reference="first")
    second = _grave(db, reference="second")
    burial = _burial(db, grave_id=str(first.id))

    repo_graves.attach_burial(db, second, burial, actor=ACTOR)

    db.refresh(first)
    assert first.burial_ids == []
    assert second.burial_ids == [burial.id]


def test_attach_and_detach_cover(db):
    grave = _grave(db)
    cover = _cover(db)

    repo_graves.attach_cover(db, grave, cover, actor=ACTOR)
    repo_graves.attach_cover(db, grave, cover, actor=ACTOR)
    assert grave.cover_ids == [cover.id]

    repo_graves.detach_cover(db, grave, cover, actor=ACTOR)
    db.refresh(cover)
    assert grave.cover_ids == []
    assert cover.grave_ids == []


def test_delete_grave_detaches_everything(db):
    cemetery = _cemetery(db)
    grave = _grave(db, cemetery_id=str(cemetery.id))
    burial = _burial(db, grave_id=str(grave.id))
    cover = _cover(db, grave_ids=[str(grave.id)])
    grave_id, burial_id, cover_id, cemetery_id = grave.id, burial.id, cover.id, cemetery.id

    assert repo_graves.delete_grave(db, grave_id, actor=ACTOR) is not None

    db.expire_all()
    assert repo_graves.get_grave(db, grave_id) is None
    assert repo_burials.get_burial(db, burial_id).grave_id is None
    assert repo_covers.get_cover(db, cover_id).grave_ids == []
    assert repo_cemeteries.get_cemetery(db, cemetery_id).grave_ids == []


def test_delete_missing_grave_returns_none(db):
    assert repo_graves.delete_grave(db, uuid.uuid4(), actor=ACTOR) is None
    assert repo_graves.delete_grave(db, None, actor=ACTOR) is None


def test_delete_cemetery_keeps_graves(db):
    cemetery = _cemetery(db)
    grave = _grave(db, cemetery_id=str(cemetery.id))
    grave_id = grave.id

    repo_cemeteries.delete_cemetery(db, cemetery.id, actor=ACTOR)

    db.expire_all()
    survivor = repo_graves.get_grave(db, grave_id)
    assert survivor is not None
    assert survivor.cemetery_id is None


def test_delete_burial_prunes_grave(db):
    grave = _grave(db)
    burial = _burial(db, grave_id=str(grave.id))

    repo_burials.delete_burial(db, burial.id, actor=ACTOR)

    db.refresh(grave)
    assert grave.burial_ids == []


def test_update_burial_moves_grave(db):
    first = _grave(db)
    second = _grave(db)
    burial = _burial(db, grave_id=str(first.id))

    repo_burials.update_burial(db, burial.id, schemas.BurialUpdate(grave_id=second.id), actor=ACTOR)

    db.refresh(first)
    db.refresh(second)
    assert first.burial_ids == []
    assert second.burial_ids == [burial.id]


def test_update_burial_with_unknown_grave_raises(db):
    burial = _burial(db)
    with pytest.raises(EntityNotFound):
        repo_burials.update_burial(db, burial.id, schemas.BurialUpdate(grave_id=uuid.uuid4()), actor=ACTOR)
    db.rollback()


def test_cover_update_replaces_graves(db):
    first = _grave(db)
    second = _grave(db)
    cover = _cover(db, grave_ids=[str(first.id), str(first.id)])
    assert cover.grave_ids == [first.id]

    repo_covers.update_cover(db, cover.id, schemas.CoverUpdate(grave_ids=[second.id]), actor=ACTOR)

    db.refresh(first)
    db.refresh(second)
    assert first.cover_ids == []
    assert second.cover_ids == [cover.id]


def test_delete_cover_prunes_graves(db):
    grave = _grave(db)
    cover = _cover(db, grave_ids=[str(grave.id)])

    repo_covers.delete_cover(db, cover.id, actor=ACTOR)

    db.refresh(grave)
    assert grave.cover_ids == []
    assert db.query(models.grave_covers).count() == 0
