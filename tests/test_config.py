from safelyq.config import DEFAULT_TOOLS, get_settings


def test_defaults_keep_credentials_out_of_source() -> None:
    settings = get_settings()

    assert settings.client_id is None
    assert settings.client_secret is None
    assert settings.user_phone_number is None
    assert settings.enabled_tools == DEFAULT_TOOLS
    assert str(settings.graphql_url).startswith("https://")


def test_environment_overrides_and_csv_lists(monkeypatch) -> None:
    monkeypatch.setenv("SAFELYQ_CLIENT_ID", "safelyq.api")
    monkeypatch.setenv("SAFELYQ_CLIENT_SECRET", "from-env")
    monkeypatch.setenv("SAFELYQ_USER_PHONE_NUMBER", "+15550001111")
    monkeypatch.setenv("SAFELYQ_ENABLED_TOOLS", "check_user_appointments, ")
    monkeypatch.setenv("SAFELYQ_REQUEST_TIMEOUT", "2.5")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.client_id == "safelyq.api"
    assert settings.client_secret == "from-env"
    assert settings.user_phone_number == "+15550001111"
    assert settings.enabled_tools == ["check_user_appointments"]
    assert settings.request_timeout == 2.5


def test_comma_separated_tools_and_origins(monkeypatch) -> None:
    monkeypatch.setenv("SAFELYQ_ENABLED_TOOLS", "get_business_info,check_user_appointments")
    monkeypatch.setenv("SAFELYQ_CORS_ORIGINS", "http://a.test, http://b.test")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.enabled_tools == ["get_business_info", "check_user_appointments"]
    assert [str(origin).rstrip("/") for origin in settings.cors_origins] == [
        "http://a.test",
        "http://b.test",
    ]
