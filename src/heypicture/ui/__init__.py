"""Gradio user interface for Hey Picture."""
