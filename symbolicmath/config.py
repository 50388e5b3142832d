from dataclasses import dataclass


@dataclass
class RenderConfig:
    def __init__(self, float_format: str = "{:g}", variable_prefix: str = "x_"):
        """
        Configuration class for the textual rendering of expressions.

        Rendering is only used for debugging and error messages; it never
        affects the value of an expression.

        Args:
            float_format (str): Format string applied to every coefficient and constant
                when an expression is converted with ``str()``. Defaults to "{:g}".
            variable_prefix (str): Prefix of the default name given to newly allocated
                variables. The variable id is appended, giving names like ``x_0``.
                Defaults to "x_".
        """
        self.float_format = float_format
        self.variable_prefix = variable_prefix

    def format_float(self, value: float) -> str:
        return self.float_format.format(value)


# Shared rendering settings
render_config = RenderConfig()
