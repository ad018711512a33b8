"""Tests for the SQLAlchemy repositories against an in-memory SQLite database."""
import asyncio
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.application.dto.rating_dto import RatingSubmission
from app.application.services.administrator_service import AdministratorService
from app.application.services.rating_engine import RatingEngine
from app.application.services.vehicle_service import VehicleService
from app.domain.entities.rating import Rating
from app.domain.entities.vehicle import VehiclePhoto, VehicleStatus
from app.domain.errors import Conflict, ErrorKind, StorageError
from app.infrastructure.persistence import models
from app.infrastructure.persistence.repositories.sqlalchemy_administrator_repository import (
    SQLAlchemyAdministratorRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_rating_repository import (
    SQLAlchemyRatingRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_vehicle_repository import (
    SQLAlchemyVehicleRepository,
)
from factories import sample_administrator, sample_vehicle


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def repos(test_db_session):
    return {
        "vehicle_repo": SQLAlchemyVehicleRepository(test_db_session),
        "administrator_repo": SQLAlchemyAdministratorRepository(test_db_session),
        "rating_repo": SQLAlchemyRatingRepository(test_db_session),
    }


@pytest.fixture
def engine(repos, ticking_clock):
    return RatingEngine(
        vehicle_repository=repos["vehicle_repo"],
        administrator_repository=repos["administrator_repo"],
        rating_repository=repos["rating_repo"],
        clock=ticking_clock,
    )


@pytest.fixture
def seeded(repos):
    """One vehicle and two administrators."""
    vehicle = run(repos["vehicle_repo"].create(sample_vehicle()))
    a1 = run(repos["administrator_repo"].create(sample_administrator("a1@example.com")))
    a2 = run(repos["administrator_repo"].create(sample_administrator("a2@example.com")))
    return vehicle.id, a1.id, a2.id


def rating_rows(session, vehicle_id=None):
    query = session.query(models.VehicleRating)
    if vehicle_id is not None:
        query = query.filter(models.VehicleRating.vehicle_id == vehicle_id)
    return query.all()


@pytest.mark.integration
class TestRatingRepository:
    """Test the rating repository and engine on SQLite."""

    def test_rating_scenario(self, engine, seeded):
        vehicle_id, a1, a2 = seeded

        assert run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=5, comment="great"))).ok
        duplicate = run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=2)))
        assert duplicate.error.kind == ErrorKind.CONFLICT
        assert run(engine.submit_rating(a2, vehicle_id, RatingSubmission(stars=3))).ok

        assert run(engine.average_stars(vehicle_id)).value == pytest.approx(4.0)
        views = run(engine.list_ratings_for_vehicle(vehicle_id)).value
        assert [v.rating.administrator_id for v in views] == [a2, a1]
        assert views[1].rating.comment == "great"
        assert views[1].author.email == "a1@example.com"

    def test_unique_constraint_becomes_conflict(self, repos, seeded, test_db_session):
        """A duplicate insert that bypasses the pre-check is refused by the database."""
        vehicle_id, a1, _ = seeded
        rating_repo = repos["rating_repo"]
        now = datetime(2025, 11, 10, 12, 0, 0)

        run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=5, created_at=now)))
        with pytest.raises(Conflict):
            run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=1, created_at=now)))

        rows = rating_rows(test_db_session, vehicle_id)
        assert len(rows) == 1
        assert rows[0].stars == 5

    def test_session_usable_after_conflict(self, repos, seeded, test_db_session):
        vehicle_id, a1, a2 = seeded
        rating_repo = repos["rating_repo"]
        now = datetime(2025, 11, 10, 12, 0, 0)
        run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=5, created_at=now)))
        with pytest.raises(Conflict):
            run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=4, created_at=now)))

        stored = run(rating_repo.add(
            Rating(id=None, vehicle_id=vehicle_id, administrator_id=a2, stars=4, created_at=now)
        ))

        assert stored.id is not None
        assert len(rating_rows(test_db_session, vehicle_id)) == 2

    def test_list_orders_by_created_at_then_id(self, repos, seeded):
        vehicle_id, a1, a2 = seeded
        rating_repo = repos["rating_repo"]
        older = datetime(2025, 1, 1, 8, 0, 0)
        newer = older + timedelta(days=1)
        first = run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=2, created_at=newer)))
        second = run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a2, stars=4, created_at=older)))

        views = run(rating_repo.list_for_vehicle(vehicle_id))

        assert [v.rating.id for v in views] == [first.id, second.id]
        assert all(v.vehicle is None for v in views)

    def test_summary_uses_sql_aggregates(self, repos, seeded):
        vehicle_id, a1, a2 = seeded
        rating_repo = repos["rating_repo"]
        now = datetime(2025, 11, 10, 12, 0, 0)

        empty = run(rating_repo.summary_for_vehicle(vehicle_id))
        assert empty.count == 0
        assert empty.average is None

        run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=5, created_at=now)))
        run(rating_repo.add(Rating(id=None, vehicle_id=vehicle_id, administrator_id=a2, stars=2, created_at=now)))
        summary = run(rating_repo.summary_for_vehicle(vehicle_id))

        assert summary.count == 2
        assert summary.average == pytest.approx(3.5)
        assert isinstance(summary.average, float)

    def test_get_view_joins_author_and_vehicle(self, repos, seeded):
        vehicle_id, a1, _ = seeded
        rating_repo = repos["rating_repo"]
        stored = run(rating_repo.add(Rating(
            id=None, vehicle_id=vehicle_id, administrator_id=a1, stars=4,
            comment="smooth ride", created_at=datetime(2025, 11, 10, 12, 0, 0),
        )))

        view = run(rating_repo.get_view(stored.id))

        assert view.rating.comment == "smooth ride"
        assert view.author.email == "a1@example.com"
        assert view.vehicle.plate == "ABC1D23"
        assert run(rating_repo.get_view(stored.id + 100)) is None

    def test_delete_rating(self, engine, seeded, test_db_session):
        vehicle_id, a1, a2 = seeded
        rating = run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=5))).value

        assert run(engine.delete_rating(rating.id, a2)).error.kind == ErrorKind.FORBIDDEN
        assert len(rating_rows(test_db_session)) == 1

        assert run(engine.delete_rating(rating.id, a1)).ok
        assert rating_rows(test_db_session) == []


@pytest.mark.integration
class TestReferentialIntegrity:
    """Test the foreign keys between vehicles, photos, administrators and ratings."""

    def test_vehicle_delete_cascades_to_photos_and_ratings(self, engine, repos, seeded, test_db_session):
        vehicle_id, a1, a2 = seeded
        run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=5)))
        run(engine.submit_rating(a2, vehicle_id, RatingSubmission(stars=1)))

        assert run(repos["vehicle_repo"].delete(vehicle_id))

        test_db_session.expire_all()
        assert rating_rows(test_db_session) == []
        assert test_db_session.query(models.VehiclePhoto).count() == 0
        assert run(repos["vehicle_repo"].get_by_id(vehicle_id)) is None

    def test_administrator_with_ratings_is_restricted(self, engine, repos, seeded):
        vehicle_id, a1, _ = seeded
        run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=5)))

        with pytest.raises(Conflict):
            run(repos["administrator_repo"].delete(a1))
        assert run(repos["administrator_repo"].exists(a1))

    def test_administrator_without_ratings_can_be_deleted(self, repos, seeded):
        _, _, a2 = seeded

        assert run(repos["administrator_repo"].delete(a2))
        assert not run(repos["administrator_repo"].exists(a2))

    def test_duplicate_email_is_conflict(self, repos, seeded):
        with pytest.raises(Conflict):
            run(repos["administrator_repo"].create(sample_administrator("a1@example.com")))


@pytest.mark.integration
class TestVehicleRepository:
    """Test vehicle persistence."""

    def test_create_round_trips_fields(self, repos):
        created = run(repos["vehicle_repo"].create(
            sample_vehicle(status=VehicleStatus.RESERVED, price=Decimal("99999.99"))
        ))

        loaded = run(repos["vehicle_repo"].get_by_id(created.id))

        assert loaded.status == VehicleStatus.RESERVED
        assert loaded.price == Decimal("99999.99")
        assert [p.url for p in loaded.photos] == ["https://example.com/corolla-front.jpg"]
        assert loaded.photos[0].vehicle_id == created.id

    def test_update_keeps_listed_photos_and_adds_new_ones(self, repos, test_db_session):
        created = run(repos["vehicle_repo"].create(sample_vehicle(photos=[
            VehiclePhoto(id=None, url="https://example.com/a.jpg"),
            VehiclePhoto(id=None, url="https://example.com/b.jpg"),
        ])))
        keep = created.photos[0]
        created.photos = [keep, VehiclePhoto(id=None, url="https://example.com/c.jpg")]
        created.color = "Black"

        updated = run(repos["vehicle_repo"].update(created))

        assert updated.color == "Black"
        assert [p.url for p in updated.photos] == ["https://example.com/a.jpg", "https://example.com/c.jpg"]
        assert updated.photos[0].id == keep.id
        assert test_db_session.query(models.VehiclePhoto).count() == 2

    def test_list_page(self, repos):
        for i in range(3):
            run(repos["vehicle_repo"].create(sample_vehicle(name=f"Car {i}")))

        page = run(repos["vehicle_repo"].list_page(skip=1, limit=1))

        assert [v.name for v in page] == ["Car 1"]

    def test_add_and_delete_photo(self, repos):
        created = run(repos["vehicle_repo"].create(sample_vehicle(photos=[])))

        photo = run(repos["vehicle_repo"].add_photo(created.id, "https://example.com/new.jpg"))
        assert photo.vehicle_id == created.id

        assert run(repos["vehicle_repo"].delete_photo(created.id, photo.id))
        assert not run(repos["vehicle_repo"].delete_photo(created.id, photo.id))
        assert run(repos["vehicle_repo"].get_by_id(created.id)).photos == []


@pytest.fixture
def lost_tables(engine, seeded, test_db_engine):
    """A stored rating whose tables disappear under the live session."""
    vehicle_id, a1, a2 = seeded
    rating = run(engine.submit_rating(a1, vehicle_id, RatingSubmission(stars=4))).value
    models.Base.metadata.drop_all(bind=test_db_engine)
    return vehicle_id, a1, a2, rating.id


@pytest.mark.integration
class TestStorageFailures:
    """Driver errors surface as StorageError instead of escaping raw."""

    @pytest.mark.parametrize("operation", [
        lambda e, v, a1, a2, r: e.vehicle_exists(v),
        lambda e, v, a1, a2, r: e.list_ratings_for_vehicle(v),
        lambda e, v, a1, a2, r: e.rating_summary(v),
        lambda e, v, a1, a2, r: e.average_stars(v),
        lambda e, v, a1, a2, r: e.get_rating_by_id(r),
        lambda e, v, a1, a2, r: e.delete_rating(r, a1),
        lambda e, v, a1, a2, r: e.submit_rating(a2, v, RatingSubmission(stars=3)),
    ], ids=["exists", "list", "summary", "average", "get", "delete", "submit"])
    def test_engine_returns_storage_error(self, engine, lost_tables, operation):
        result = run(operation(engine, *lost_tables))

        assert not result.ok
        assert result.error.kind == ErrorKind.STORAGE
        assert isinstance(result.error.cause, SQLAlchemyError)

    def test_rating_repository_reads(self, repos, lost_tables):
        vehicle_id, a1, _, rating_id = lost_tables
        rating_repo = repos["rating_repo"]

        for call in (
            lambda: rating_repo.exists_for(vehicle_id, a1),
            lambda: rating_repo.get_view(rating_id),
            lambda: rating_repo.list_for_vehicle(vehicle_id),
            lambda: rating_repo.summary_for_vehicle(vehicle_id),
            lambda: rating_repo.delete(rating_id),
        ):
            with pytest.raises(StorageError) as exc_info:
                run(call())
            assert isinstance(exc_info.value.cause, SQLAlchemyError)

    def test_vehicle_repository_reads(self, repos, lost_tables):
        vehicle_id = lost_tables[0]
        vehicle_repo = repos["vehicle_repo"]

        for call in (
            lambda: vehicle_repo.exists(vehicle_id),
            lambda: vehicle_repo.get_by_id(vehicle_id),
            lambda: vehicle_repo.list_page(),
            lambda: vehicle_repo.delete(vehicle_id),
            lambda: vehicle_repo.add_photo(vehicle_id, "https://example.com/x.jpg"),
            lambda: vehicle_repo.delete_photo(vehicle_id, 1),
        ):
            with pytest.raises(StorageError):
                run(call())

    def test_administrator_repository_reads(self, repos, lost_tables):
        _, a1, a2, _ = lost_tables
        administrator_repo = repos["administrator_repo"]

        for call in (
            lambda: administrator_repo.exists(a1),
            lambda: administrator_repo.get_by_id(a1),
            lambda: administrator_repo.get_by_email("a1@example.com"),
            lambda: administrator_repo.list_page(),
            lambda: administrator_repo.delete(a2),
        ):
            with pytest.raises(StorageError):
                run(call())

    def test_services_return_storage_error(self, repos, lost_tables):
        vehicle_id, a1, _, _ = lost_tables
        vehicles = VehicleService(vehicle_repository=repos["vehicle_repo"])
        administrators = AdministratorService(administrator_repository=repos["administrator_repo"])

        assert run(vehicles.get_vehicle(vehicle_id)).error.kind == ErrorKind.STORAGE
        assert run(vehicles.list_vehicles(1)).error.kind == ErrorKind.STORAGE
        assert run(vehicles.delete_vehicle(vehicle_id)).error.kind == ErrorKind.STORAGE
        assert run(administrators.get_administrator(a1)).error.kind == ErrorKind.STORAGE
        assert run(administrators.list_administrators(1)).error.kind == ErrorKind.STORAGE
