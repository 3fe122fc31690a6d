import pytest
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError

from broker_directory.errors import DatastoreError, DatastoreTimeout
from broker_directory.search import (
    MAX_RESULTS,
    build_search_query,
    build_specialty_query,
    implied_specialties,
    search_providers,
)
from conftest import FakeSession, compile_pg, make_provider


def test_no_criteria_short_circuits_without_datastore():
    db = FakeSession()
    result = search_providers(db, "", None, None)
    assert result.data == []
    assert result.count == 0
    assert db.statements == []


def test_text_query_matches_four_fields_case_insensitively():
    sql, params = compile_pg(build_search_query("Maria", None, None))
    where = sql.split("WHERE", 1)[1]
    for column in ("name", "email", "address", "neighborhood"):
        assert f"insurance_brokers.{column}" in where
    assert "ILIKE" in where or "lower(" in where
    assert where.count(" OR ") == 3
    assert "ORDER BY insurance_brokers.name ASC" in sql
    assert "LIMIT" in sql
    assert "Maria" in params.values()
    assert MAX_RESULTS in params.values()


def test_text_query_escapes_like_wildcards():
    _, params = compile_pg(build_search_query("a_b", None, None))
    assert "a/_b" in params.values()
    assert "a_b" not in params.values()


def test_specialty_and_neighborhood_filters_are_bound():
    sql, params = compile_pg(build_search_query("", "vida", "Aldeota"))
    assert "insurance_brokers.specialties @>" in sql
    assert "insurance_brokers.neighborhood = " in sql
    assert "LIKE" not in sql
    assert ["vida"] in params.values()
    assert "Aldeota" in params.values()
    # nothing is interpolated into the SQL text
    assert "Aldeota" not in sql


def test_specialty_and_neighborhood_search():
    rows = [make_provider(1, "Ana Seguros", ("vida",)), make_provider(2, "Bruno Corretora", ("vida", "auto"))]
    db = FakeSession(rows)

    result = search_providers(db, "", "vida", "Aldeota")

    assert result.data == rows
    assert result.count == 2
    # explicit specialty: no reclassification query
    assert len(db.statements) == 1


def test_keyword_table_order_is_fixed():
    assert implied_specialties("casa de saúde") == ["residencial", "saude"]
    assert implied_specialties("CARRO") == ["auto"]
    assert implied_specialties("corretora") == []


def test_reclassification_replaces_text_matches():
    auto_rows = [make_provider(3, "Auto Center Seguros"), make_provider(4, "Zeca Veículos")]
    db = FakeSession([], auto_rows)

    result = search_providers(db, "seguro auto", None, None)

    assert result.data == auto_rows
    assert result.count == 2
    assert len(db.statements) == 2
    sql, params = compile_pg(db.statements[1])
    assert "LIKE" not in sql
    assert ["auto"] in params.values()
    assert sql == compile_pg(build_specialty_query("auto"))[0]


def test_reclassification_wins_over_existing_text_matches():
    text_rows = [make_provider(5, "Casa Nova Seguros", ("vida",))]
    home_rows = [make_provider(6, "Lar Seguro", ("residencial",))]
    db = FakeSession(text_rows, home_rows)

    result = search_providers(db, "casa", None, None)

    assert result.data == home_rows


def test_empty_specialty_listing_keeps_text_matches_and_tries_next_keyword():
    text_rows = [make_provider(7, "Carro Saúde Corretora")]
    health_rows = [make_provider(8, "Clínica Seguros", ("saude",))]
    db = FakeSession(text_rows, [], health_rows)

    result = search_providers(db, "carro saúde", None, None)

    assert result.data == health_rows
    assert len(db.statements) == 3


def test_no_keyword_means_single_query():
    rows = [make_provider(9, "Maria Corretora")]
    db = FakeSession(rows)
    assert search_providers(db, "maria", None, None).data == rows
    assert len(db.statements) == 1


def test_failed_fallback_query_keeps_text_matches():
    text_rows = [make_provider(10, "Viagem Tranquila")]
    db = FakeSession(text_rows, SQLAlchemyError("relation does not exist"))

    result = search_providers(db, "viagem", None, None)

    assert result.data == text_rows


def test_datastore_failure_raises_generic_error():
    db = FakeSession(SQLAlchemyError("password authentication failed"))
    with pytest.raises(DatastoreError) as excinfo:
        search_providers(db, "maria", None, None)
    assert excinfo.value.message == "Erro na consulta ao banco de dados"
    assert "password" not in excinfo.value.message


def test_pool_timeout_raises_timeout():
    db = FakeSession(PoolTimeoutError("QueuePool limit reached"))
    with pytest.raises(DatastoreTimeout):
        search_providers(db, "", "auto", None)


def test_fallback_timeout_aborts_search():
    text_rows = [make_provider(11, "Casa Carro")]
    db = FakeSession(text_rows, PoolTimeoutError("QueuePool limit reached"), [make_provider(12, "Lar Seguro")])

    with pytest.raises(DatastoreTimeout):
        search_providers(db, "carro casa", None, None)
    assert len(db.statements) == 2
