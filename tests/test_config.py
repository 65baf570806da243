from witsml_client.config import ApiClientSettings


class TestApiClientSettings:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("WITSMLEXPLORER_API_URL", "https://api.example.com")
        monkeypatch.setenv("WITSMLEXPLORER_AUTH_ENABLED", "true")
        monkeypatch.setenv("WITSMLEXPLORER_API_SCOPE", "api://witsml/.default")

        settings = ApiClientSettings(_env_file=None)

        assert settings.api_url == "https://api.example.com"
        assert settings.auth_enabled is True
        assert settings.scopes == ["api://witsml/.default"]

    def test_defaults(self, monkeypatch):
        for name in ("API_URL", "PAGE_LOCATION", "AUTH_ENABLED", "API_SCOPE"):
            monkeypatch.delenv(f"WITSMLEXPLORER_{name}", raising=False)

        settings = ApiClientSettings(_env_file=None)

        assert settings.api_url is None
        assert settings.page_location is None
        assert settings.auth_enabled is False
        assert settings.scopes == []
