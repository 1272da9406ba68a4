"""CRUD de concesionarios, catálogo externo e importación desde el catálogo."""

import pytest
from sqlalchemy.exc import IntegrityError

from optimaflow.core.errors import NotFound, ValidationError
from optimaflow.crud import dealerships as crud
from optimaflow.crud.external_dealerships import get_external_dealership, list_external_dealerships
from optimaflow.models.dealership import Dealership
from optimaflow.models.enums import DealershipStatus
from optimaflow.services import dealership_import
from optimaflow.services.dealership_import import import_external_dealership, nota_de_procedencia


# ── CRUD de concesionarios ────────────────────────────────────────────────────────────────────────────────


class TestDealershipCRUD:
    def test_create_defaults_to_activo(self, db):
        dealer = crud.create_dealership(db, {"name": "Autos Norte", "city": "Bilbao"})
        assert dealer.status == DealershipStatus.ACTIVO
        assert dealer.osm_id is None

    def test_blank_name_is_rejected(self, db):
        with pytest.raises(ValidationError):
            crud.create_dealership(db, {"name": "   "})
        assert db.query(Dealership).count() == 0

    def test_partial_update(self, db):
        dealer = crud.create_dealership(db, {"name": "Autos Norte", "phone": "944000000"})
        updated = crud.update_dealership(db, dealer.id, {"status": DealershipStatus.INACTIVO})
        assert updated.status == DealershipStatus.INACTIVO
        assert updated.phone == "944000000"

    def test_update_missing_raises(self, db):
        with pytest.raises(NotFound):
            crud.update_dealership(db, 999, {"city": "Vigo"})

    def test_null_status_is_rejected_before_writing(self, db):
        dealer = crud.create_dealership(db, {"name": "Autos Norte"})
        with pytest.raises(ValidationError):
            crud.update_dealership(db, dealer.id, {"status": None})
        assert crud.get_dealership(db, dealer.id).status == DealershipStatus.ACTIVO

    def test_list_filters_by_status(self, db):
        crud.create_dealership(db, {"name": "A"})
        crud.create_dealership(db, {"name": "B", "status": DealershipStatus.PENDIENTE})
        pending = crud.list_dealerships(db, DealershipStatus.PENDIENTE)
        assert [d.name for d in pending] == ["B"]
        assert len(crud.list_dealerships(db)) == 2

    def test_delete(self, db):
        dealer = crud.create_dealership(db, {"name": "A"})
        crud.delete_dealership(db, dealer.id)
        assert crud.get_dealership(db, dealer.id) is None
        with pytest.raises(NotFound):
            crud.delete_dealership(db, dealer.id)


class TestDealershipRoutes:
    def test_crud_roundtrip(self, client):
        resp = client.post("/api/v1/dealerships/", json={
            "name": "Autos Norte", "city": "Bilbao", "latitude": "43.26", "longitude": "-2.93",
        })
        assert resp.status_code == 201
        dealer_id = resp.json()["id"]

        got = client.get(f"/api/v1/dealerships/{dealer_id}").json()
        assert got["status"] == "activo"
        assert got["latitude"] == "43.26"

        updated = client.patch(f"/api/v1/dealerships/{dealer_id}", json={"status": "pendiente"}).json()
        assert updated["status"] == "pendiente"
        assert updated["city"] == "Bilbao"

        listed = client.get("/api/v1/dealerships/", params={"status": "pendiente"}).json()
        assert [d["id"] for d in listed] == [dealer_id]

        assert client.delete(f"/api/v1/dealerships/{dealer_id}").json() == {"success": True}
        assert client.get(f"/api/v1/dealerships/{dealer_id}").json() is None

    def test_empty_name_is_rejected(self, client):
        assert client.post("/api/v1/dealerships/", json={"name": " "}).status_code == 422

    def test_unknown_status_is_rejected(self, client):
        assert client.post("/api/v1/dealerships/", json={"name": "A", "status": "cerrado"}).status_code == 422

    def test_update_missing_is_404(self, client):
        assert client.patch("/api/v1/dealerships/999", json={"city": "Vigo"}).status_code == 404

    @pytest.mark.parametrize("cambios", [{"status": None}, {"name": None}])
    def test_null_for_required_field_is_422(self, client, cambios):
        dealer_id = client.post("/api/v1/dealerships/", json={"name": "Autos Norte"}).json()["id"]
        resp = client.patch(f"/api/v1/dealerships/{dealer_id}", json=cambios)
        assert resp.status_code == 422

        got = client.get(f"/api/v1/dealerships/{dealer_id}").json()
        assert got["name"] == "Autos Norte"
        assert got["status"] == "activo"

    def test_null_clears_optional_field(self, client):
        dealer_id = client.post("/api/v1/dealerships/", json={"name": "Autos Norte", "phone": "944000000"}).json()["id"]
        updated = client.patch(f"/api/v1/dealerships/{dealer_id}", json={"phone": None}).json()
        assert updated["phone"] is None
        assert updated["status"] == "activo"


# ── Catálogo externo ────────────────────────────────────────────────────────────────────────────────────


class TestExternalCatalog:
    def test_lists_ordered_by_name(self, db, external_catalog):
        names = [d.name for d in list_external_dealerships(db)]
        assert names == sorted(names)
        assert len(names) == 4

    @pytest.mark.parametrize("query, expected", [
        ("castellana", {"ext-123"}),
        ("MADRID", {"ext-123"}),
        ("españa", {"ext-123", "ext-789"}),
        ("berlin", {"ext-456"}),
        ("", {"ext-123", "ext-456", "ext-789", "ext-nosrc"}),
    ])
    def test_search_matches_name_city_or_country(self, db, external_catalog, query, expected):
        assert {d.id for d in list_external_dealerships(db, query=query)} == expected

    def test_pagination(self, db, external_catalog):
        first = list_external_dealerships(db, limit=2, offset=0)
        second = list_external_dealerships(db, limit=2, offset=2)
        assert len(first) == len(second) == 2
        assert not {d.id for d in first} & {d.id for d in second}

    def test_limit_is_capped(self, db):
        with pytest.raises(ValidationError):
            list_external_dealerships(db, limit=101)

    def test_get(self, db, external_catalog):
        assert get_external_dealership(db, "ext-456").brand == "BMW"
        assert get_external_dealership(db, "ext-000") is None

    def test_routes(self, client, external_catalog):
        listed = client.get("/api/v1/external-dealerships/", params={"query": "sevilla"}).json()
        assert [d["id"] for d in listed] == ["ext-789"]
        assert client.get("/api/v1/external-dealerships/", params={"limit": 500}).status_code == 422
        assert client.get("/api/v1/external-dealerships/ext-123").json()["osm_id"] == 123


# ── Importación desde el catálogo ──────────────────────────────────────────────────────────────────────────


class TestImportBridge:
    def test_creates_pending_dealership_with_provenance(self, db, external_catalog):
        dealer_id = import_external_dealership(db, "ext-123")
        dealer = crud.get_dealership(db, dealer_id)
        assert dealer.status == DealershipStatus.PENDIENTE
        assert dealer.osm_id == 123
        assert dealer.name == "Autos Castellana"
        assert dealer.latitude == "40.4378"
        assert "osm_id: 123" in dealer.notes
        assert "Marca: SEAT" in dealer.notes

    def test_importing_twice_returns_same_row(self, db, external_catalog):
        first = import_external_dealership(db, "ext-123")
        second = import_external_dealership(db, "ext-123")
        assert first == second
        assert db.query(Dealership).filter(Dealership.osm_id == 123).count() == 1

    def test_unknown_external_id(self, db, external_catalog):
        with pytest.raises(NotFound):
            import_external_dealership(db, "ext-000")

    def test_record_without_source_id(self, db, external_catalog):
        dealer = crud.get_dealership(db, import_external_dealership(db, "ext-nosrc"))
        assert dealer.osm_id is None
        assert "ext-nosrc" in dealer.notes

    def test_storage_constraint_resolves_concurrent_import(self, db, external_catalog, monkeypatch):
        # Importación concurrente: la búsqueda previa no ve la fila y salta la restricción única
        crud.create_dealership(db, {"name": "Ya importado", "osm_id": 456})
        monkeypatch.setattr(dealership_import, "get_dealership_by_osm_id", _miss_first(crud.get_dealership_by_osm_id))

        dealer_id = import_external_dealership(db, "ext-456")
        assert crud.get_dealership(db, dealer_id).name == "Ya importado"
        assert db.query(Dealership).filter(Dealership.osm_id == 456).count() == 1

    def test_osm_id_unique_at_storage_layer(self, db):
        crud.create_dealership(db, {"name": "A", "osm_id": 1})
        with pytest.raises(IntegrityError):
            crud.create_dealership(db, {"name": "B", "osm_id": 1})
        db.rollback()

    def test_note_without_brand(self, db, external_catalog):
        assert nota_de_procedencia(get_external_dealership(db, "ext-789")) == (
            "Importado desde OpenStreetMap (osm_id: 789)"
        )

    def test_route_is_idempotent(self, client, db, external_catalog):
        first = client.post("/api/v1/external-dealerships/ext-123/import")
        second = client.post("/api/v1/external-dealerships/ext-123/import")
        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        assert db.query(Dealership).count() == 1

    def test_route_unknown_is_404(self, client):
        assert client.post("/api/v1/external-dealerships/nope/import").status_code == 404


def _miss_first(lookup):
    calls = {"n": 0}

    def wrapper(db, osm_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return lookup(db, osm_id)

    return wrapper
