import pytest

from points24 import create_app
from points24.config import TestingConfig
from points24.solver import SolverOutput
from points24.solver.registry import SOLVER_KEY

# what the native solver prints for "4 4 10 10": the prompt has no newline,
# so it ends up in front of the first solution line
SAMPLE_OUTPUT = (
    "请输入数字（输入 random 进入随机模式）：(10*10-4)/4 = 24\n"
    "(10*10-4)/4 = 24\r\n"
    "请输入数字（输入 random 进入随机模式）："
)


class FakeSolver:
    def __init__(self, stdout=SAMPLE_OUTPUT, stderr="", error=None):
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls = []

    def __call__(self, numbers, limit):
        self.calls.append((list(numbers), limit))
        if self.error is not None:
            raise self.error
        return SolverOutput(self.stdout, self.stderr)


@pytest.fixture
def fake_solver():
    return FakeSolver()


@pytest.fixture
def app(fake_solver):
    app = create_app(TestingConfig)
    app.extensions[SOLVER_KEY] = fake_solver
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
