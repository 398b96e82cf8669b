"""Walk a throwaway database through one course/module round trip.

Usage: python scripts/smoke_request.py

Uses FastAPI's TestClient, so no server needs to be running.
"""

import pathlib
import sys
import tempfile

# Ensure backend folder is on sys.path so `studyplanner` package can be imported
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from studyplanner.config import Settings
from studyplanner.main import create_app


def main():
    with tempfile.TemporaryDirectory() as tmp:
        app = create_app(Settings(DB_PATH=pathlib.Path(tmp) / "smoke.sqlite"))
        with TestClient(app) as client:
            steps = [
                ("GET", "/api", None),
                ("POST", "/api/courses", {"name": "Software Engineering", "type": "BSc"}),
                ("POST", "/api/modules", {"name": "Math", "code": "MATH101", "credits": 3, "course_id": 1}),
                ("GET", "/api/modules", None),
                ("DELETE", "/api/courses/1", None),
                ("GET", "/api/modules", None),
            ]
            for method, path, body in steps:
                resp = client.request(method, path, json=body)
                print(method, path, "->", resp.status_code, resp.json())
        app.state.engine.dispose()


if __name__ == '__main__':
    main()
