# tests/test_aula_service.py

from datetime import date

import pytest
from sqlalchemy import text

from academico.schemas.aula import AulasBatch
from academico.services.aula_service import create_lessons_batch, generate_lesson_dates, weekly_dates


def make_batch(**overrides):
    data = {
        "turmaId": 7,
        "diaDaSemana": 1,
        "dataInicio": "2025-01-06",
        "dataFim": "2025-01-27",
        "horaInicio": "19:00",
        "horaFim": "21:00",
    }
    data.update(overrides)
    return AulasBatch.model_validate(data)


class TestWeeklyDates:

    def test_mondays(self):
        assert weekly_dates(date(2025, 1, 6), date(2025, 1, 27), 1) == [
            date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20), date(2025, 1, 27),
        ]

    def test_wednesdays_of_january(self):
        datas = weekly_dates(date(2025, 1, 1), date(2025, 1, 31), 3)
        assert len(datas) == 5
        assert datas[0] == date(2025, 1, 1)

    def test_sunday(self):
        assert weekly_dates(date(2025, 1, 1), date(2025, 1, 10), 0) == [date(2025, 1, 5)]

    def test_no_match_in_range(self):
        assert weekly_dates(date(2025, 1, 7), date(2025, 1, 8), 1) == []


class TestGenerateLessonDates:

    def test_plain(self):
        assert len(generate_lesson_dates(make_batch()).datas) == 4

    def test_holidays_skipped_when_requested(self):
        feriados = [(date(2025, 1, 13), date(2025, 1, 17))]
        geradas = generate_lesson_dates(make_batch(pularFeriados=True), feriados)
        assert date(2025, 1, 13) not in geradas.datas
        assert len(geradas.datas) == 3

    def test_holidays_ignored_by_default(self):
        feriados = [(date(2025, 1, 13), date(2025, 1, 13))]
        assert len(generate_lesson_dates(make_batch(), feriados).datas) == 4

    def test_existing_dates_counted(self):
        geradas = generate_lesson_dates(make_batch(), existentes=[date(2025, 1, 20)])
        assert geradas.datas == [date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 27)]
        assert geradas.existentes_ignoradas == 1


class TestCreateLessonsBatch:

    def test_dry_run_inserts_nothing(self, db):
        response = create_lessons_batch(db, make_batch(dryRun=True))
        assert response.total_geradas == 4
        assert response.criadas is None
        assert db.execute(text("SELECT COUNT(*) FROM aulas")).scalar() == 0

    def test_inserts_lessons(self, db):
        response = create_lessons_batch(db, make_batch())
        assert response.total_geradas == 4
        assert [a.data for a in response.criadas] == [
            date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20), date(2025, 1, 27),
        ]
        assert all(a.hora_inicio == "19:00" and a.turma_id == 7 for a in response.criadas)
        assert db.execute(text("SELECT COUNT(*) FROM aulas WHERE turma_id = 7")).scalar() == 4

    def test_skips_stored_events_and_lessons(self, db):
        db.execute(text("INSERT INTO calendario (evento, inicio, termino) VALUES ('Recesso', '2025-01-13', '2025-01-14')"))
        db.execute(text("INSERT INTO aulas (turma_id, data) VALUES (7, '2025-01-27')"))

        response = create_lessons_batch(db, make_batch(pularFeriados=True))

        assert [a.data for a in response.criadas] == [date(2025, 1, 6), date(2025, 1, 20)]
        assert response.existentes_ignoradas == 1

    def test_other_class_lessons_do_not_count(self, db):
        db.execute(text("INSERT INTO aulas (turma_id, data) VALUES (8, '2025-01-06')"))
        response = create_lessons_batch(db, make_batch())
        assert response.existentes_ignoradas == 0
        assert response.total_geradas == 4


def test_batch_rejects_inverted_range():
    with pytest.raises(ValueError):
        make_batch(dataInicio="2025-02-01", dataFim="2025-01-01")
