import math
import numbers
from typing import Any, Dict, Mapping


class FieldNormalizer:
    """Coerces projected values into floats wherever their text is numeric.

    Percent suffixes are stripped without rescaling, so "45%" becomes 45.0.
    Values that do not parse (descriptions, compass points, trend words)
    are left exactly as they came in, which makes normalize idempotent.
    Numbers InfluxDB cannot store as a float field (nan, inf, ints beyond
    float range) are passed on as their text.
    """

    def normalize_value(self, value: Any) -> Any:
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            try:
                number = float(value)
            except OverflowError:
                return str(value)
            if not math.isfinite(number):
                return str(value)
            return number

        text = value if isinstance(value, str) else str(value)
        text = text.strip().removesuffix("%").strip()

        # no digit grouping: "1_000" is text, not a number
        if "_" in text:
            return value

        try:
            number = float(text)
        except ValueError:
            return value

        # InfluxDB rejects nan/inf field values
        if not math.isfinite(number):
            return value
        return number

    def normalize(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: self.normalize_value(value) for key, value in values.items()}
