"""
Diagram step-through state

- steps: 불변 스텝 시퀀스와 히스토리 커서
"""

from .steps import StepSequence, StepCursor, get_sequence, list_sequences
