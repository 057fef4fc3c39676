import uvicorn

from app.core.app_factory import create_app

app = create_app()


def run() -> None:
    """Serve the API with uvicorn (console script entry point)."""
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
