"""AArch64 instruction encoders, in-memory code patching, module layout discovery,
pointer-path following and tick/time-span arithmetic."""

__version__ = "0.1.0"

__all__ = [
    "arith",
    "bits",
    "branch",
    "encoding",
    "layout",
    "loadstore_immediate",
    "loadstore_offset",
    "logical",
    "patcher",
    "pointer_path",
    "registers",
    "tick",
    "timespan",
]