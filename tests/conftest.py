"""Shared fixtures for ExactMSA tests."""

import pytest


@pytest.fixture
def four_dna():
    """Four sequences of unequal length, optimal reference score 45."""
    return ["AATTATGG", "ACATTGTTG", "GCCAGGAGG", "AATTTTGAGG"]


@pytest.fixture
def four_aa():
    """Four identical dinucleotides, optimal score 36 (raw 72)."""
    return ["AA", "AA", "AA", "AA"]


@pytest.fixture
def three_dna():
    return ["GATTACA", "GCATGCT", "GATACA"]
