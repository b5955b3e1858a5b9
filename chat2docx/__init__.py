"""
AI Chat to Word
===============

Converts text copied from AI assistants, Markdown prose mixed with LaTeX
math, into a Word document with every equation rendered as an image.

Main components:
- Segmentation of $$...$$, \\[...\\] and \\(...\\) math from text
- Equation rendering to high-resolution PNG
- Markdown headings, lists and paragraphs
- Document assembly and DOCX export
"""

__version__ = "1.0.0"
__author__ = "chat2docx Team"
