#!/usr/bin/env python3
"""
Calculator Program Demo for ByteCalc

Deploys the calculator program into a local runtime and sends one signed
transaction per sample instruction, printing the program logs of each.
"""

import logging

from bytecalc.runtime import Keypair, LocalRuntime, Message, Transaction, TransactionInstruction
from bytecalc.vm import Instruction

logger = logging.getLogger(__name__)

SCENARIOS = [
    Instruction(operation=0, left=10, right=5),
    Instruction(operation=1, left=20, right=8),
    Instruction(operation=3, left=10, right=0),
    Instruction(operation=5, left=2, right=10),
    Instruction(operation=5, left=3, right=-1),
    Instruction(operation=9, left=1, right=1),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    runtime = LocalRuntime()
    payer = Keypair.generate()
    program_id = Keypair.generate().pubkey()
    runtime.add_program(program_id)

    for instruction in SCENARIOS:
        message = Message(
            TransactionInstruction(program_id, instruction.to_bytes()),
            payer.pubkey(),
            runtime.latest_blockhash(),
        )
        result = runtime.send_transaction(Transaction.new([payer], message))

        status = "ok" if result.success else f"failed ({result.error.error_code})"
        logger.info("%s -> %s", instruction, status)
        for line in result.logs:
            logger.info("    %s", line)


if __name__ == "__main__":
    main()
