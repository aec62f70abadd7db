# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecalc test suite.

Unit tests mirror the package layout; integration tests check that the
annual, monthly and legacy-input paths agree with each other.
"""
