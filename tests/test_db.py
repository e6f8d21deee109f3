from chips.db import _engine_options


def test_sqlite_allows_cross_thread_use():
    url, options = _engine_options("sqlite:///./dev.db")
    assert url == "sqlite:///./dev.db"
    assert options == {"connect_args": {"check_same_thread": False}}


def test_postgres_gets_ssl_and_pool_checks():
    url, options = _engine_options("postgresql://u:p@db/chips")
    assert url == "postgresql://u:p@db/chips?sslmode=require"
    assert options["pool_pre_ping"] is True

    url, _ = _engine_options("postgresql://u:p@db/chips?application_name=chips")
    assert url.endswith("&sslmode=require")

    url, _ = _engine_options("postgresql://u:p@db/chips?sslmode=disable")
    assert url.endswith("sslmode=disable")
