"""
Program entrypoint.

``process_instruction`` is what a host runtime invokes: it receives the
program id, the account list (unused, the program is stateless) and the raw
instruction data, and either returns the computed value after logging
``Result = <value>`` or raises the structured error.
"""

import logging

logger = logging.getLogger(__name__)
from typing import Any, Optional, Sequence, Union

from ..errors.exceptions import ByteCalcError
from .evaluator import Evaluator
from .instruction import decode


def process_instruction(
    program_id: Any,
    accounts: Sequence[Any],
    instruction_data: Union[bytes, bytearray, memoryview],
    *,
    evaluator: Optional[Evaluator] = None,
) -> int:
    """Decode, evaluate and log one instruction."""
    evaluator = evaluator or Evaluator()
    try:
        instruction = decode(instruction_data)
        result = evaluator.evaluate(instruction)
    except ByteCalcError as e:
        e.context.program_id = str(program_id) if program_id is not None else None
        e.context.component = "program"
        logger.debug("Instruction failed: %s", e)
        raise

    evaluator.msg(f"Result = {result}")
    return result
