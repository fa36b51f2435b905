# tests/conftest.py
"""
テスト共通のフィクスチャ。
"""
import pytest


@pytest.fixture
def labels():
    return {0x401000: "main", 0x403000: "g_table", 0xFFFFFFF0: "high_symbol"}
