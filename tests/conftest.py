import json

import pytest

from college_predictor.utils import load_dataset

COLLECTION = "MHT-CET College Data"

RECORDS = [
    {"Sr No": 1, "Institute": "Government College of Engineering, Amravati (Autonomous)",
     "Institute Code": 1002, "Branch": "Computer Engineering", "Seat Type": "GOPENS",
     "Rank": 1200, "Percentile": 98.5},
    {"Sr No": 2, "Institute": "Sardar Patel Institute of Technology (Un-Aided)",
     "Institute Code": "3199", "Branch": "Computer Engineering", "Seat Type": "GOPENS",
     "Rank": 3500, "Percentile": 96.2},
    {"Sr No": 3, "Institute": "Pune Institute of Computer Technology (Aided)",
     "Institute Code": "6175", "Branch": "Information Technology", "Seat Type": "LOPENS",
     "Rank": 2100, "Percentile": 97.1},
    {"Sr No": 4, "Institute": "Vishwakarma Institute of Technology (Autonomous)",
     "Institute Code": 6206, "Branch": "Mechanical Engineering", "Seat Type": "GOPENS",
     "Rank": 9000, "Percentile": 90.0},
    {"Sr No": 5, "Institute": "Nagpur Institute of Technology",
     "Institute Code": "4115", "Branch": "Civil Engineering", "Seat Type": "GOBCS",
     "Percentile": 75.4},
    {"Sr No": 6, "Institute": "Government Polytechnic Nashik",
     "Institute Code": "5003", "Branch": "Electrical Engineering", "Seat Type": "GOPENS",
     "Rank": 15000},
    {"Sr No": 7, "Institute": "Shri Sant Gajanan Maharaj College of Engineering",
     "Institute Code": "1120", "Branch": "Computer Engineering", "Seat Type": "GOPENS",
     "Rank": 6000, "Percentile": 96.2},
]


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "colleges.json"
    path.write_text(json.dumps({COLLECTION: RECORDS}), encoding="utf-8")
    return path


@pytest.fixture
def dataset(dataset_file):
    return load_dataset(str(dataset_file), COLLECTION)
