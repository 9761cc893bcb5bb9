"""Concurrent CLI invocations, each in its own process, against one data dir."""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from jobcard.infrastructure.cli.main import cli
from jobcard.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from jobcard.infrastructure.persistence.json_job_repository import JsonJobRepository

SRC_DIR = Path(__file__).resolve().parents[2] / "src"
ENTRY = "from jobcard.infrastructure.cli.main import cli; cli()"
WORKERS = 8


@pytest.fixture
def shop(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    data_dir = tmp_path / "data"
    env = {"JOBCARD_DATA_DIR": str(data_dir), "JOBCARD_DATABASE_URL": None}
    runner = CliRunner()

    def run(*args):
        result = runner.invoke(cli, list(args), env=env)
        assert result.exit_code == 0, result.output

    run("user", "add", "--id", "mia", "--name", "Mia", "--role", "mechanic")
    run(
        "inventory", "add", "--name", "Brake Pad",
        "--cost-price", "12.00", "--sale-price", "20.00", "--quantity", "100",
    )
    run("job", "create", "--customer", "c1", "--vehicle", "v1")
    run("job", "assign", "--id", "1", "--mechanic", "mia")
    run("job", "start", "--id", "1", "--as", "mia")
    return data_dir


def _spawn(data_dir: Path, cwd: Path, *args: str) -> subprocess.Popen:
    env = dict(os.environ)
    env.pop("JOBCARD_DATABASE_URL", None)
    env["JOBCARD_DATA_DIR"] = str(data_dir)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), os.environ.get("PYTHONPATH")) if p
    )
    return subprocess.Popen(
        [sys.executable, "-c", ENTRY, *args],
        cwd=cwd,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


def test_parallel_add_part_processes_lose_nothing(shop, tmp_path):
    procs = [
        _spawn(shop, tmp_path, "job", "add-part", "--id", "1", "--as", "mia",
               "--item", "1", "--quantity", "1")
        for _ in range(WORKERS)
    ]
    for proc in procs:
        out, err = proc.communicate(timeout=120)
        assert proc.returncode == 0, err

    job = JsonJobRepository(shop / "jobs.json").get_by_id(1)
    stock = JsonInventoryRepository(shop / "inventory.json").get_by_id("1").quantity
    assert len(job.parts_used) == WORKERS
    assert stock == 100 - WORKERS
