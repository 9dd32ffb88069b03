"""User-configurable macro interpreter.

Macros are loaded from config (``loader``), gated by condition trees
(``conditions``) and executed action by action against a
``MacroRuntimeContext`` bound to a ``MacroHost``.
"""

from .actions import MacroActions
from .entry_macro import AfterCommand, EntryMacro
from .errors import MacroDefinitionError, MacroError
from .host import MacroHost, PrintStyle
from .loader import identified_macros, load_entry_macros, load_macros
from .macro import Macro
from .placeholders import MacroSymbol, StringWithPlaceholders
from .runtime import MacroResult, MacroRuntimeContext, run_macro

__all__ = [
    "AfterCommand",
    "EntryMacro",
    "Macro",
    "MacroActions",
    "MacroDefinitionError",
    "MacroError",
    "MacroHost",
    "MacroResult",
    "MacroRuntimeContext",
    "MacroSymbol",
    "PrintStyle",
    "StringWithPlaceholders",
    "identified_macros",
    "load_entry_macros",
    "load_macros",
    "run_macro",
]
