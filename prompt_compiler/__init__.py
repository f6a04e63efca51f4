"""Prompt compilation and response extraction for the portfolio assistant."""
from .context_builder import NOT_SPECIFIED, build_context
from .cross_reference import SkillReference, build_cross_reference, render_cross_reference
from .dates import ParsedDate, parse_date_point, parse_period, split_period
from .extractor import CONFIRMATION_MESSAGE, InterviewReply, extract_completion
from .gaps import EmploymentGap, detect_gaps, find_gaps
from .interview import SECTIONS, UnknownSectionError, build_interview_prompt, section_prompt
from .rehearsal import QAPair, generate_rehearsal, render_rehearsal
from .request_builder import SYSTEM_INSTRUCTION, build_enrichment, build_generate_request, build_prompt
from .skills import ParsedSkill, parse_skill_spec

__all__ = [
    "CONFIRMATION_MESSAGE",
    "NOT_SPECIFIED",
    "SECTIONS",
    "SYSTEM_INSTRUCTION",
    "EmploymentGap",
    "InterviewReply",
    "ParsedDate",
    "ParsedSkill",
    "QAPair",
    "SkillReference",
    "UnknownSectionError",
    "build_context",
    "build_cross_reference",
    "build_enrichment",
    "build_generate_request",
    "build_interview_prompt",
    "build_prompt",
    "detect_gaps",
    "extract_completion",
    "find_gaps",
    "generate_rehearsal",
    "parse_date_point",
    "parse_period",
    "parse_skill_spec",
    "render_cross_reference",
    "render_rehearsal",
    "section_prompt",
    "split_period",
]
