from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from impostor.config import Settings
from impostor.main import create_app

from tests.helpers import ADMIN_PASSWORD


def test_static_front_end_is_served(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<h1>Impostor</h1>", encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('hi')", encoding="utf-8")

    app = create_app(Settings(admin_password=ADMIN_PASSWORD, static_dir=tmp_path))
    with TestClient(app) as client:
        index = client.get("/")
        assert index.status_code == 200
        assert "Impostor" in index.text

        js = client.get("/app.js")
        assert js.status_code == 200

        assert client.get("/missing.css").status_code == 404
        assert client.get("/api/health").json() == {"ok": True}
        assert client.get("/api/unknown").json() == {"ok": False, "error": "Not found"}
