"""UI components for InsightFlow."""
from .overview import render_summary_cards, render_mean_distribution, render_column_table
from .visualizer import render_visualizer
from .report import render_report_generator

__all__ = [
    "render_summary_cards",
    "render_mean_distribution",
    "render_column_table",
    "render_visualizer",
    "render_report_generator",
]
