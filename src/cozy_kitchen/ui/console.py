import asyncio
from typing import Optional
try:
    import readline  # For better input handling (Unix/Linux)
except ImportError:
    # readline is not available on Windows by default, but that's okay
    pass


class ConsoleIO:
    """Line-oriented console used by the planning loop"""

    async def read_line(self) -> Optional[str]:
        """Read one line from stdin; None at end of input"""

        # Run input in executor to avoid blocking the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read)

    @staticmethod
    def _read() -> Optional[str]:
        try:
            return input()
        except EOFError:
            return None

    def write(self, text: str = ""):
        print(text, flush=True)
