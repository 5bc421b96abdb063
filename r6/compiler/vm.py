from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from r6 import RuntimeValue, printer
from r6.config import get_max_depth
from r6.errors import R6ArityError, R6RuntimeError, R6TypeError
from r6.types.environment import Primitive
from r6.types.nil import Nil
from r6.types.pair import make_list

from .chunk import Chunk
from .function import Closure, Frame, Function
from .opcodes import Opcode

logger = logging.getLogger(__name__)


@dataclass
class CallFrame:
    chunk: Chunk
    ip: int
    base: int
    env: Frame | None  # lexical frame chain the code reads variables through


class VM:
    class RunSignal:
        NORMAL = 0
        RETURN = 1

    def __init__(self, max_depth: int | None = None):
        self.stack: List[Any] = []
        self.frames: List[CallFrame] = []
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        # Opcode dispatch table
        self._dispatch: dict[int, Callable[[CallFrame, int], Tuple[int, Any | None]]] = {}
        self._init_dispatch()

    @staticmethod
    def _is_truthy(v: Any) -> bool:
        # Only #f is false
        return v is not False

    def _init_dispatch(self) -> None:
        d = self._dispatch
        # Stack and constants
        d[Opcode.PUSH_NIL] = self.op_push_nil
        d[Opcode.PUSH_TRUE] = self.op_push_true
        d[Opcode.PUSH_FALSE] = self.op_push_false
        d[Opcode.PUSH_CONST] = self.op_push_const
        d[Opcode.POP] = self.op_pop
        # Variables
        d[Opcode.LOAD_VAR] = self.op_load_var
        # Control flow
        d[Opcode.JUMP] = self.op_jump
        d[Opcode.JUMP_IF_FALSE] = self.op_jump_if_false
        d[Opcode.RETURN] = self.op_return
        # Functions / closures / calls
        d[Opcode.MAKE_CLOSURE] = self.op_make_closure
        d[Opcode.CALL] = self.op_call
        # Misc
        d[Opcode.HALT] = self.op_halt

    # --- Operand decoding ---
    @staticmethod
    def _read_u8(frame: CallFrame) -> int:
        v = frame.chunk.code[frame.ip]
        frame.ip += 1
        return v

    @staticmethod
    def _read_u16(frame: CallFrame) -> int:
        code = frame.chunk.code
        v = (code[frame.ip] << 8) | code[frame.ip + 1]
        frame.ip += 2
        return v

    def _read_rel16(self, frame: CallFrame) -> int:
        rel = self._read_u16(frame)
        if rel & 0x8000:
            rel = rel - (1 << 16)
        return rel

    # --- Per-op handlers ---
    # Stack and constants
    def op_push_nil(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        self.push(Nil)
        return VM.RunSignal.NORMAL, None

    def op_push_true(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        self.push(True)
        return VM.RunSignal.NORMAL, None

    def op_push_false(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        self.push(False)
        return VM.RunSignal.NORMAL, None

    def op_push_const(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        idx = self._read_u16(frame)
        self.push(frame.chunk.constants[idx])
        return VM.RunSignal.NORMAL, None

    def op_pop(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        self.pop()
        return VM.RunSignal.NORMAL, None

    # Variables
    def op_load_var(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        depth = self._read_u8(frame)
        slot = self._read_u16(frame)
        env = frame.env
        for _ in range(depth):
            if env is None:
                break
            env = env.parent
        if env is None or slot >= len(env.slots):
            raise R6RuntimeError(f"Unbound variable slot {slot} at frame depth {depth}")
        self.push(env.slots[slot])
        return VM.RunSignal.NORMAL, None

    # Control flow
    def op_jump(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        rel = self._read_rel16(frame)
        frame.ip += rel
        return VM.RunSignal.NORMAL, None

    def op_jump_if_false(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        rel = self._read_rel16(frame)
        if not self._is_truthy(self.pop()):
            frame.ip += rel
        return VM.RunSignal.NORMAL, None

    def op_return(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        ret = self.pop()
        self.frames.pop()
        del self.stack[frame.base:]
        self.push(ret)
        return VM.RunSignal.NORMAL, None

    # Functions / closures / calls
    def op_make_closure(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        fn = frame.chunk.constants[self._read_u16(frame)]
        # Shares the current frame chain with every other closure made here
        self.push(Closure(fn=fn, frame=frame.env))
        return VM.RunSignal.NORMAL, None

    def _collect_args(self, frame: CallFrame) -> list[Any]:
        argc = self._read_u8(frame)
        if argc == 0:
            return []
        args = self.stack[-argc:]
        del self.stack[-argc:]
        return args

    @staticmethod
    def _bind_arguments(fn: Function, args: list[Any]) -> list[Any]:
        label = fn.name or "procedure"
        if fn.rest:
            if len(args) < fn.arity:
                raise R6ArityError(f"{label} expects at least {fn.arity} argument(s), got {len(args)}")
            return args[:fn.arity] + [make_list(args[fn.arity:])]
        if len(args) != fn.arity:
            raise R6ArityError(f"{label} expects {fn.arity} argument(s), got {len(args)}")
        return args

    def _call_primitive(self, callee: Primitive, args: list[Any]) -> None:
        if len(args) < callee.min_args or (callee.max_args is not None and len(args) > callee.max_args):
            if callee.max_args == callee.min_args:
                expected = f"{callee.min_args}"
            elif callee.max_args is None:
                expected = f"at least {callee.min_args}"
            else:
                expected = f"{callee.min_args} to {callee.max_args}"
            raise R6ArityError(f"{callee.name} expects {expected} argument(s), got {len(args)}")
        self.push(callee.function(args))

    def _call_closure(self, callee: Closure, args: list[Any]) -> None:
        if len(self.frames) >= self.max_depth:
            raise R6RuntimeError(f"Call depth limit exceeded ({self.max_depth})")
        slots = self._bind_arguments(callee.fn, args)
        env = Frame(slots=slots, parent=callee.frame)
        self.frames.append(CallFrame(chunk=callee.fn.chunk, ip=0, base=len(self.stack), env=env))

    def op_call(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        args = self._collect_args(frame)
        callee = self.pop()
        if isinstance(callee, Primitive):
            self._call_primitive(callee, args)
        elif isinstance(callee, Closure):
            self._call_closure(callee, args)
        else:
            raise R6TypeError(
                f"Cannot call {printer.kind_of(callee)}: {printer.to_external(callee)}")
        return VM.RunSignal.NORMAL, None

    # Misc
    def op_halt(self, frame: CallFrame, op: int) -> Tuple[int, Any | None]:
        return VM.RunSignal.RETURN, (self.pop() if self.stack else Nil)

    # --- Stack helpers ---
    def push(self, v: Any) -> None:
        self.stack.append(v)

    def pop(self) -> Any:
        return self.stack.pop()

    # --- Execution ---
    def run(self, chunk: Chunk) -> RuntimeValue:
        self.stack = []
        self.frames = [CallFrame(chunk=chunk, ip=0, base=0, env=None)]
        logger.debug("run: %d bytes", len(chunk.code))

        while True:
            frame = self.frames[-1]
            code = frame.chunk.code
            if frame.ip >= len(code):
                raise R6RuntimeError("Code ended without RETURN or HALT")
            op = code[frame.ip]
            frame.ip += 1

            handler = self._dispatch.get(op)
            if handler is None:
                raise R6RuntimeError(f"Unknown opcode: {op}")
            signal, value = handler(frame, op)
            if signal == VM.RunSignal.RETURN:
                logger.debug("run: finished with %s", printer.kind_of(value))
                return value


def run_chunk(chunk: Chunk, max_depth: Optional[int] = None) -> RuntimeValue:
    vm = VM(max_depth)
    return vm.run(chunk)
