import math

import pytest

from college_predictor.classifier import classify
from college_predictor.models import CollegeType


@pytest.mark.parametrize("institute,expected", [
    ("XYZ Government Autonomous Institute", CollegeType.GOVERNMENT_AUTONOMOUS),
    ("Government College of Engineering, Karad", CollegeType.GOVERNMENT),
    ("ABC -aided Polytechnic", CollegeType.UNAIDED),
    ("Sardar Patel Institute of Technology (Un-Aided)", CollegeType.UNAIDED),
    ("Private Unaided College", CollegeType.UNAIDED),
    ("Walchand College of Engineering (Aided)", CollegeType.AIDED),
    ("Vishwakarma Institute of Technology (Autonomous)", CollegeType.AUTONOMOUS),
    ("Govt Autonomous College", CollegeType.AUTONOMOUS),
    ("Nagpur Institute of Technology", CollegeType.OTHER),
])
def test_classify(institute, expected):
    assert classify(institute) == expected


@pytest.mark.parametrize("institute", [None, "", "   ", math.nan])
def test_classify_missing_text_is_other(institute):
    assert classify(institute) == CollegeType.OTHER


def test_classify_is_case_insensitive():
    assert classify("GOVERNMENT AUTONOMOUS") == CollegeType.GOVERNMENT_AUTONOMOUS
    assert classify("gOvErNmEnT college") == CollegeType.GOVERNMENT


def test_government_wins_over_aided():
    assert classify("Government Aided College") == CollegeType.GOVERNMENT


def test_aided_needs_whole_word():
    assert classify("Fraidedo Institute") == CollegeType.OTHER


def test_classify_unicode_text():
    assert classify("Institut Polytechnique Éducatif (AIDED)") == CollegeType.AIDED
    assert classify("ग्रामीण Government संस्था") == CollegeType.GOVERNMENT


@pytest.mark.parametrize("institute", [
    "-Aided Institute of Engineering",
    "ABC -aided Polytechnic",
    "Modern College (Un-Aided)",
])
def test_hyphenated_aided_is_unaided_anywhere(institute):
    assert classify(institute) == CollegeType.UNAIDED
