import pytest

from points24 import create_app
from points24.config import TestingConfig
from points24.solver import SolverTimeout

FRACTION = r"\frac{10 \cdot 10 - 4}{4}"


def post_solve(client, body):
    return client.post("/api/solve", json=body)


class TestSolve:
    def test_solutions_are_extracted_and_rendered(self, client, fake_solver):
        resp = post_solve(client, {"numbers": [4, 4, 10, 10]})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["solutions"] == [{"infix": "(10*10-4)/4", "latex": FRACTION}]
        assert data["count"] == 1
        assert data["limit"] == 200
        assert isinstance(data["tookMs"], int)
        assert "stderr" not in data
        assert fake_solver.calls == [([4, 4, 10, 10], 200)]

    def test_limit_is_capped(self, client, fake_solver):
        resp = post_solve(client, {"numbers": [1, 2], "limit": 5000})
        assert resp.get_json()["limit"] == 1000
        assert fake_solver.calls[-1][1] == 1000

    def test_explicit_limit(self, client):
        resp = post_solve(client, {"numbers": [1, 2], "limit": 5})
        assert resp.get_json()["limit"] == 5

    @pytest.mark.parametrize("limit", ["10", True, -3, 0, 2.5, None])
    def test_bad_limit_uses_default(self, client, limit):
        resp = post_solve(client, {"numbers": [1, 2], "limit": limit})
        assert resp.status_code == 200
        assert resp.get_json()["limit"] == 200

    @pytest.mark.parametrize("numbers", [
        None, [], "4 4 10 10", [1] * 9, [1001], [-1001], [True, 2], ["4"], [1.5],
    ])
    def test_invalid_numbers(self, client, fake_solver, numbers):
        resp = post_solve(client, {"numbers": numbers})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid numbers"}
        assert fake_solver.calls == []

    def test_missing_body(self, client):
        resp = client.post("/api/solve")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid numbers"}

    def test_boundary_numbers_accepted(self, client):
        resp = post_solve(client, {"numbers": [1000, -1000, 0, 1, 2, 3, 4, 5]})
        assert resp.status_code == 200

    def test_invalid_json(self, client):
        resp = client.post("/api/solve", data="{nope", content_type="application/json")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid JSON"}

    def test_non_object_json(self, client):
        resp = client.post("/api/solve", json=[4, 4, 10, 10])
        assert resp.status_code == 400

    def test_method_not_allowed(self, client):
        resp = client.get("/api/solve")
        assert resp.status_code == 405
        assert resp.get_json() == {"error": "Method not allowed"}

    def test_payload_too_large(self, client):
        resp = client.post(
            "/api/solve", data="x" * 1_000_001, content_type="application/json"
        )
        assert resp.status_code == 413
        assert resp.get_json() == {"error": "payload too large"}

    def test_stderr_is_passed_through(self, client, fake_solver):
        fake_solver.stderr = "warning: slow"
        resp = post_solve(client, {"numbers": [4, 4, 10, 10]})
        assert resp.get_json()["stderr"] == "warning: slow"

    def test_solver_failure(self, client, fake_solver):
        fake_solver.error = SolverTimeout("timeout")
        resp = post_solve(client, {"numbers": [4, 4, 10, 10]})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "timeout"}

    def test_missing_executable(self):
        app = create_app(TestingConfig)
        resp = app.test_client().post("/api/solve", json={"numbers": [4, 6]})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "missing-solver not found"}

    def test_no_solutions(self, client, fake_solver):
        fake_solver.stdout = "请输入数字（输入 random 进入随机模式）：无解\n"
        data = post_solve(client, {"numbers": [1, 1, 1, 1]}).get_json()
        assert data["solutions"] == []
        assert data["count"] == 0


class TestLatex:
    def test_render(self, client):
        resp = client.post("/api/latex", json={"expr": "sqrt(16)"})
        assert resp.get_json() == {"infix": "sqrt(16)", "latex": r"\sqrt{16}", "ok": True}

    def test_fallback(self, client):
        resp = client.post("/api/latex", json={"expr": "2+"})
        assert resp.status_code == 200
        assert resp.get_json() == {"infix": "2+", "latex": r"\text{2+}", "ok": False}

    def test_deeply_nested_expr(self, client):
        expr = "(" * 400 + "1" + ")" * 400
        resp = client.post("/api/latex", json={"expr": expr})
        assert resp.status_code == 200
        assert resp.get_json() == {"infix": expr, "latex": r"\text{" + expr + "}", "ok": False}

    def test_render_all_call_args_setting(self, app, client):
        app.config["RENDER_ALL_CALL_ARGS"] = True
        resp = client.post("/api/latex", json={"expr": "foo(1,2)"})
        assert resp.get_json()["latex"] == r"\operatorname{foo}\left(1, 2\right)"

    def test_missing_expr(self, client):
        resp = client.post("/api/latex", json={})
        assert resp.status_code == 400


class TestHistory:
    def test_runs_are_recorded(self, client, fake_solver):
        post_solve(client, {"numbers": [10, 4, 10, 4]})
        fake_solver.error = SolverTimeout("timeout")
        post_solve(client, {"numbers": [1, 2]})

        data = client.get("/api/history").get_json()
        assert data["count"] == 2
        latest, first = data["runs"]
        assert latest["status"] == "error"
        assert latest["error"] == "timeout"
        assert first["status"] == "ok"
        assert first["values_key"] == "04-04-10-10"
        assert first["numbers"] == [10, 4, 10, 4]
        assert first["count"] == 1

    def test_rejected_requests_are_not_recorded(self, client):
        post_solve(client, {"numbers": []})
        assert client.get("/api/history").get_json()["count"] == 0

    def test_recording_can_be_disabled(self, app, client):
        app.config["RECORD_RUNS"] = False
        post_solve(client, {"numbers": [4, 6]})
        assert client.get("/api/history").get_json()["count"] == 0

    def test_n(self, client):
        for _ in range(3):
            post_solve(client, {"numbers": [4, 6]})
        assert client.get("/api/history?n=2").get_json()["count"] == 2

    def test_bad_n(self, client):
        assert client.get("/api/history?n=abc").status_code == 400


class TestPages:
    def test_index(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"24 Points Machine" in resp.data

    def test_index_solves(self, client, fake_solver):
        resp = client.get("/?numbers=4+4+10+10&limit=20")
        assert resp.status_code == 200
        assert b"(10*10-4)/4" in resp.data
        assert fake_solver.calls == [([4, 4, 10, 10], 20)]

    def test_index_rejects_single_number(self, client, fake_solver):
        resp = client.get("/?numbers=5")
        assert resp.status_code == 400
        assert fake_solver.calls == []

    @pytest.mark.parametrize(
        "numbers", ["99999999999999999999+5", "1001+2", "-1001+2", "1+2+3+4+5+6+7+8+9"]
    )
    def test_index_enforces_api_bounds(self, client, fake_solver, numbers):
        resp = client.get(f"/?numbers={numbers}")
        assert resp.status_code == 400
        assert b"between -1000 and 1000" in resp.data
        assert fake_solver.calls == []

    def test_index_accepts_boundary_numbers(self, client, fake_solver):
        resp = client.get("/?numbers=1000+-1000")
        assert resp.status_code == 200
        assert fake_solver.calls == [([1000, -1000], 200)]

    def test_index_shows_solver_error(self, client, fake_solver):
        fake_solver.error = SolverTimeout("timeout")
        resp = client.get("/?numbers=1+2")
        assert resp.status_code == 200
        assert b"Solver error: timeout" in resp.data

    def test_security_headers(self, client):
        resp = client.get("/")
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert "nonce-" in resp.headers["Content-Security-Policy"]
        assert "cdn.jsdelivr.net" in resp.headers["Content-Security-Policy"]
        assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    def test_security_headers_follow_config(self):
        class Config(TestingConfig):
            FRAME_OPTIONS = "SAMEORIGIN"
            KATEX_CDN = ""

        resp = create_app(Config).test_client().get("/")
        assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"
        csp = resp.headers["Content-Security-Policy"]
        assert "font-src 'self';" in csp
        assert "cdn.jsdelivr.net" not in csp
