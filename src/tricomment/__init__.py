"""Tricomment annotation engine for input-method candidates."""

from .models import AnnotationRecord, Candidate, CandidateKind, CodeMode, Instruction

__all__ = ["AnnotationRecord", "Candidate", "CandidateKind", "CodeMode", "Instruction"]
