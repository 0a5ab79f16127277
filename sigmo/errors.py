"""Host-level exceptions.

Language-level failures are `error` atoms returned by evaluation; these
exceptions only cross the boundary between the interpreter and its host
(reader failures, batch loads that must halt, broken macro expansions).
"""


class SigmoError(Exception):
    """ Base class for all Sigmo host errors"""
    pass

class SigmoSyntaxError(SigmoError):
    """ Raised when source text cannot be tokenized into a valid form tree"""

class SigmoLoadError(SigmoError):
    """ Raised when a batch file load fails and the process must halt"""

class SigmoMacroError(SigmoError):
    """ Raised when a macro splices a substitution that is not a list"""
