"""Dump analysis tools."""

from stationconv.analysis.syx_analyzer import MessageInfo, SyxAnalysis, SyxAnalyzer

__all__ = ["MessageInfo", "SyxAnalysis", "SyxAnalyzer"]
