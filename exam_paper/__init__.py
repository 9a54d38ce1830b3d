"""
exam_paper
Randomized mid-term exam papers from an uploaded question bank.

Upload rows once with PaperGenerator.upload(), then call
PaperGenerator.generate("mid1") per request.
"""
from exam_paper.services.paper_generator import PaperGenerator, get_paper_generator

__all__ = ["PaperGenerator", "get_paper_generator"]
