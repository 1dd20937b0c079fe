from roster import __main__ as entrypoint
from roster.core.config import ServerSettings, Settings


def test_main_runs_uvicorn_with_server_settings(mocker):
    settings = Settings(server=ServerSettings(host="127.0.0.1", port=9090), log_level="DEBUG")
    mocker.patch.object(entrypoint, "get_settings", return_value=settings)
    run = mocker.patch("uvicorn.run")

    entrypoint.main()

    run.assert_called_once_with(
        "roster.main:app",
        host="127.0.0.1",
        port=9090,
        reload=False,
        log_level="debug",
    )
