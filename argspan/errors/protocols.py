from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from argspan.errors.report import RenderOptions, Report


@runtime_checkable
class ErrorFormatter(Protocol):
    """Protocol for error **formatter** callables.

    It's the formatter's job to transform a single :class:`.Report` into the text shown to the user.
    """

    def __call__(self, report: "Report", options: "RenderOptions") -> str:
        """Render a single error.

        Parameters
        ----------
        report : Report
            The error, its message, highlight, and the context needed to translate its indices.
        options : RenderOptions
            Whether ANSI sequences may be emitted, and the wrap width.

        Returns
        -------
        str
            Rendered error. May span multiple lines.
        """
        ...
