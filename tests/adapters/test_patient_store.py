"""Tests for the patient repository adapters."""

import json
import logging

import pytest

from src.adapters.patient_store import InMemoryPatientRepository, JSONFilePatientStore
from src.domain.patient import Patient
from src.domain.ports import PatientNotFoundError, StoreError

from factories import make_appointment


def _patient(patient_id: str, name: str) -> Patient:
    return Patient.from_dict({"_id": patient_id, "name": name})


class TestInMemoryPatientRepository:

    def test_add_find_remove(self):
        repo = InMemoryPatientRepository()
        repo.add(_patient("p1", "Ada"))

        assert repo.find("p1").name == "Ada"
        assert "p1" in repo
        assert repo.remove("p1") is True
        assert repo.find("p1") is None
        assert repo.remove("p1") is False

    def test_add_replaces_by_id(self):
        repo = InMemoryPatientRepository([_patient("p1", "Ada")])
        repo.add(_patient("p1", "Ada King"))
        assert len(repo) == 1
        assert repo.get("p1").name == "Ada King"

    def test_get_missing_raises(self):
        with pytest.raises(PatientNotFoundError) as exc_info:
            InMemoryPatientRepository().get("ghost")
        assert exc_info.value.patient_id == "ghost"

    def test_list_all_in_insertion_order(self):
        repo = InMemoryPatientRepository([_patient("b", "B"), _patient("a", "A")])
        assert [p.id for p in repo.list_all()] == ["b", "a"]

    def test_search(self):
        repo = InMemoryPatientRepository([_patient("p1", "Ada Lovelace"), _patient("p2", "Grace Hopper")])
        assert [p.id for p in repo.search("hopper")] == ["p2"]


class TestJSONFilePatientStore:

    def test_missing_file_loads_empty(self, tmp_path):
        store = JSONFilePatientStore(tmp_path / "patients.json")
        assert store.load() == 0

    def test_save_then_load(self, tmp_path, patient_record):
        path = tmp_path / "data" / "patients.json"
        store = JSONFilePatientStore(path)
        patient = Patient.from_dict(patient_record)
        patient.chart[36].notes.append("Implant planned")
        store.add(patient)
        store.save()

        reloaded = JSONFilePatientStore(path)
        assert reloaded.load() == 1
        restored = reloaded.get("p1")
        assert restored.to_dict() == patient.to_dict()
        assert restored.chart[36].notes == ["Implant planned"]

    def test_bad_records_are_rejected_not_fatal(self, tmp_path):
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([
            {"_id": "p1", "name": "Ada"},
            {"name": "No id"},
            "garbage",
        ]), encoding="utf-8")

        store = JSONFilePatientStore(path)

        assert store.load() == 1
        assert [r["index"] for r in store.rejected] == [1, 2]

    def test_rejections_are_logged_with_record_context(self, tmp_path, caplog):
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([{"_id": "  "}]), encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="src.adapters.patient_store"):
            JSONFilePatientStore(path).load()

        [record] = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert record.record_index == 0
        assert record.patient_id == "  "

    def test_bad_chart_entry_does_not_reject_the_patient(self, tmp_path):
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([
            {"_id": "p1", "teeth": [{"ISO": "upper-left", "notes": ["x"]}, {"ISO": 16, "notes": ["Crown"]}]},
        ]), encoding="utf-8")

        store = JSONFilePatientStore(path)

        assert store.load() == 1
        assert store.rejected == []
        assert store.get("p1").chart[16].notes == ["Crown"]

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "patients.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError):
            JSONFilePatientStore(path).load()

    def test_non_array_file(self, tmp_path):
        path = tmp_path / "patients.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(StoreError):
            JSONFilePatientStore(path).load()

    def test_loaded_patients_use_store_context(self, tmp_path, context, ledger):
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([{"_id": "p1", "name": "Ada"}]), encoding="utf-8")
        ledger.add(make_appointment("p1", id="a1", paidAmount=25, isDone=True))

        store = JSONFilePatientStore(path, context=context)
        store.load()

        assert store.get("p1").total_payments == 25
