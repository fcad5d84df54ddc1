import importlib
from typing import Any, Callable

from .errors import ExecutionError
from .schema import ImplPython


def resolve(impl: ImplPython) -> Callable[..., Any]:
    try:
        mod = importlib.import_module(impl.module)
    except ImportError as e:
        raise ExecutionError(f"Module {impl.module} could not be imported: {e}") from e
    fn = getattr(mod, impl.function, None)
    if not fn:
        raise ExecutionError(f"Function {impl.function} not found in {impl.module}")
    return fn


async def exec_python(impl: ImplPython, ctx) -> Any:
    fn = resolve(impl)
    return await fn(ctx)
