"""
RPP Copilot - AI-assisted lesson plan (RPP) generator

This package turns structured lesson-plan metadata into a complete
Rencana Pelaksanaan Pembelajaran using Google Gemini, then renders it:
- core: form model, prompt builder, response contract, Gemini client, coordinator
- render: markdown-subset parser, achievement bands, shared layout,
  HTML preview, PDF and Word exporters
- storage: persisted credential settings
- ui: Gradio-based user interface
- app: main application entry point

Usage:
    # Run the Gradio UI
    python -m rpp_copilot.app.main
"""

__version__ = "0.1.0"
__author__ = "RPP Copilot Team"

__all__ = ["__version__", "__author__"]
