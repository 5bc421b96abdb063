from __future__ import annotations

from enum import IntEnum


class Opcode(IntEnum):
    """Bytecode instructions. Operands follow the opcode byte, big-endian.

    Stack effects are written `before -- after`.
    """

    # -- ()
    PUSH_NIL = 0x01
    # -- #t
    PUSH_TRUE = 0x02
    # -- #f
    PUSH_FALSE = 0x03
    # u16 constant index; -- value
    PUSH_CONST = 0x05
    # value --
    POP = 0x07

    # u8 frame depth, u16 slot; -- value
    LOAD_VAR = 0x10

    # s16 offset from the next instruction
    JUMP = 0x20
    # s16 offset; test --
    JUMP_IF_FALSE = 0x22
    # value -- (caller's stack gets value)
    RETURN = 0x24

    # u16 Function constant index; -- closure
    MAKE_CLOSURE = 0x30

    # u8 argc; callee arg1 .. argN -- result
    CALL = 0x40

    # value -- (ends the run with value)
    HALT = 0xFF


# Operand layout per opcode, used by the disassembler
OPERANDS: dict[Opcode, tuple[str, ...]] = {
    Opcode.PUSH_CONST: ("u16",),
    Opcode.LOAD_VAR: ("u8", "u16"),
    Opcode.JUMP: ("s16",),
    Opcode.JUMP_IF_FALSE: ("s16",),
    Opcode.MAKE_CLOSURE: ("u16",),
    Opcode.CALL: ("u8",),
}
