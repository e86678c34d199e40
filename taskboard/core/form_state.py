from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from taskboard.core import rules


@dataclass(slots=True)
class FieldState:
    name: str
    value: str
    initial: str
    touched: bool = False
    error: Optional[str] = None


Listener = Callable[["FormState"], None]


class FormState:
    """
    Field values, touched flags and derived validity for one form instance.

    Contract:
      - Every mutation re-validates synchronously, then notifies listeners.
      - Errors are always computed; visible_error() only reveals them for
        touched fields or after a submit attempt.
      - Fields without rules in the schema are always valid.
    """

    def __init__(self, schema: rules.Schema, initial_values: Mapping[str, object], *, name: str = "form") -> None:
        self.name = name
        self._schema = schema
        self._fields: Dict[str, FieldState] = {}
        self._listeners: List[Listener] = []
        self.submit_attempted = False
        self.last_result = rules.ValidationResult()
        self._seed(initial_values)

    # ----------------------------
    # Observers
    # ----------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ----------------------------
    # Mutations
    # ----------------------------
    def set_value(self, field_name: str, value: Optional[str]) -> None:
        f = self._field(field_name)
        f.value = "" if value is None else str(value)
        self._revalidate()
        self._notify()

    def set_touched(self, field_name: str, touched: bool = True) -> None:
        f = self._field(field_name)
        f.touched = touched
        self._revalidate()
        self._notify()

    def touch_all(self) -> None:
        self.submit_attempted = True
        for f in self._fields.values():
            f.touched = True
        self._revalidate()
        self._notify()

    def reset(self, values: Optional[Mapping[str, object]] = None) -> None:
        """
        Restore initial values and clear touched flags and errors.
        Passing values re-seeds the form with new initial values.
        """
        if values is None:
            values = {k: f.initial for k, f in self._fields.items()}
        self._fields.clear()
        self.submit_attempted = False
        self._seed(values)
        self._notify()

    # ----------------------------
    # Reads
    # ----------------------------
    def field(self, field_name: str) -> FieldState:
        return self._field(field_name)

    def value(self, field_name: str) -> str:
        return self._field(field_name).value

    def values(self) -> Dict[str, str]:
        return {k: f.value for k, f in self._fields.items()}

    def initial_values(self) -> Dict[str, str]:
        return {k: f.initial for k, f in self._fields.items()}

    def errors(self) -> Dict[str, str]:
        return {k: f.error for k, f in self._fields.items() if f.error}

    def visible_error(self, field_name: str) -> Optional[str]:
        f = self._field(field_name)
        if f.touched or self.submit_attempted:
            return f.error
        return None

    @property
    def is_valid(self) -> bool:
        return self.last_result.ok

    @property
    def is_dirty(self) -> bool:
        return any(f.value != f.initial for f in self._fields.values())

    # ----------------------------
    # Internals
    # ----------------------------
    def _field(self, field_name: str) -> FieldState:
        try:
            return self._fields[field_name]
        except KeyError:
            raise KeyError(f"Unknown field for {self.name}: {field_name!r}") from None

    def _seed(self, values: Mapping[str, object]) -> None:
        names = list(self._schema.keys())
        for extra in values.keys():
            if extra not in self._schema:
                names.append(extra)

        for n in names:
            raw = values.get(n)
            text = "" if raw is None else str(raw)
            self._fields[n] = FieldState(name=n, value=text, initial=text)
        self._revalidate()

    def _revalidate(self) -> None:
        # Cross-field rules may read any value, so the whole form is re-run.
        self.last_result = rules.validate_values(self._schema, self.values())
        for n, f in self._fields.items():
            f.error = self.last_result.error_for(n)
