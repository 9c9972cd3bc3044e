"""
Tests for pipeline transformation components.
Includes tests for parsing, enrichment, summaries and I/O operations.
"""

from pathlib import Path

# Define transforms test directory
TRANSFORMS_TEST_DIR = Path(__file__).parent
