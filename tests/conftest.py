import sqlite3

import pytest
from fastapi.testclient import TestClient

from main import app

CODES = [
    (110, "Murder, Non Negligent Manslaughter"),
    (120, "Murder, Manslaughter By Negligence"),
    (210, "Rape, By Force"),
    (300, "Robbery"),
    (600, "Theft"),
]

NEIGHBORHOODS = [
    (1, "Conway/Battlecreek/Highwood"),
    (2, "Greater East Side"),
    (3, "West Side"),
    (17, "Capitol River"),
]

# (case_number, date_time, code, incident, police_grid, neighborhood_number, block)
INCIDENTS = [
    ("20000001", "2020-01-01 08:15:00", 110, "Murder", 87, 1, "1XX MAIN ST"),
    ("20000002", "2020-01-02 12:30:00", 300, "Robbery", 88, 2, "2XX ELM ST"),
    ("20000003", "2020-01-03 18:45:00", 600, "Theft", 87, 3, "3XX OAK AV"),
    ("20000004", "2020-01-04 09:00:00", 600, "Theft", 90, 17, "4XX PINE ST"),
    ("20000005", "2020-01-05 22:10:00", 210, "Rape", 88, 2, "5XX MAPLE AV"),
    ("20000006", "2020-01-06 06:05:00", 300, "Robbery", 91, 1, "6XX CEDAR ST"),
]

# Newest first, as returned by GET /incidents.
CASES_NEWEST_FIRST = [row[0] for row in reversed(INCIDENTS)]


def create_database(path, *, case_number_column="case_number TEXT"):
    conn = sqlite3.connect(path)
    try:
        conn.executescript(
            f"""
            CREATE TABLE Codes (
                code INTEGER PRIMARY KEY,
                incident_type TEXT
            );
            CREATE TABLE Neighborhoods (
                neighborhood_number INTEGER PRIMARY KEY,
                neighborhood_name TEXT
            );
            CREATE TABLE Incidents (
                {case_number_column},
                date_time DATETIME,
                code INTEGER,
                incident TEXT,
                police_grid INTEGER,
                neighborhood_number INTEGER,
                block TEXT
            );
            """
        )
        conn.executemany("INSERT INTO Codes VALUES (?, ?)", CODES)
        conn.executemany("INSERT INTO Neighborhoods VALUES (?, ?)", NEIGHBORHOODS)
        conn.executemany("INSERT INTO Incidents VALUES (?, ?, ?, ?, ?, ?, ?)", INCIDENTS)
        conn.commit()
    finally:
        conn.close()
    return path


def count_incidents(path, case_number=None):
    conn = sqlite3.connect(path)
    try:
        if case_number is None:
            return conn.execute("SELECT COUNT(*) FROM Incidents").fetchone()[0]
        return conn.execute(
            "SELECT COUNT(*) FROM Incidents WHERE case_number = ?", (case_number,)
        ).fetchone()[0]
    finally:
        conn.close()


@pytest.fixture
def db_path(tmp_path):
    return str(create_database(tmp_path / "stpaul_crime.sqlite3"))


@pytest.fixture
def client(db_path, monkeypatch):
    monkeypatch.setenv("DATABASE_PATH", db_path)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_client(tmp_path, monkeypatch):
    """Client whose database file does not exist, so the store never opens."""
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "missing.sqlite3"))
    with TestClient(app) as c:
        yield c
