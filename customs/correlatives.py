# customs/correlatives.py
"""
Correlativo DMTI: ``{año}{aduana}{usuario}{secuencia:05d}``.

- año: el de la fecha de registro.
- aduana: la aduana de inicio sin caracteres que no sean letras o dígitos.
- usuario: código del usuario transportista ante aduana.
- secuencia: 1 + la mayor secuencia de los registros del mismo año con el
  formato actual (sufijo de 5 dígitos e id de menos de 36 caracteres; los
  ids más largos son uuid heredados). Sin registros previos arranca en 1,
  salvo 2025, que continúa la numeración que se llevaba en papel (428).
"""
import re
from datetime import date
from typing import Iterable

DEFAULT_USER_CODE = "SV02347"
SEQUENCE_DIGITS = 5
LEGACY_ID_LENGTH = 36

# Primer correlativo del año en que se empezó a usar el sistema
FIRST_SEQUENCE_BY_YEAR = {2025: 428}


def customs_code(starting_customs: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "", starting_customs or "")


def sequence_of(dmti_id: str):
    """Secuencia de un correlativo con el formato actual, o None si no lo es."""
    suffix = dmti_id[-SEQUENCE_DIGITS:]
    if len(dmti_id) >= LEGACY_ID_LENGTH or len(suffix) < SEQUENCE_DIGITS or not suffix.isdigit():
        return None
    return int(suffix)


def next_sequence(existing: Iterable, year: int) -> int:
    sequences = [
        seq
        for seq in (
            sequence_of(d.id)
            for d in existing
            if d.registration_date is not None and d.registration_date.year == year
        )
        if seq is not None
    ]
    if sequences:
        return max(sequences) + 1
    return FIRST_SEQUENCE_BY_YEAR.get(year, 1)


def next_dmti_correlative(
    existing: Iterable,
    registration_date: date,
    starting_customs: str,
    user_code: str = DEFAULT_USER_CODE,
) -> str:
    year = registration_date.year
    seq = next_sequence(existing, year)
    return f"{year}{customs_code(starting_customs)}{user_code}{seq:0{SEQUENCE_DIGITS}d}"
