import logging
from dataclasses import dataclass

logger = logging.getLogger("boggle")

QU_FACE = "Qu"
QU_TOKEN = "QU"

LETTER_SCORES = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1,
    "F": 4, "G": 2, "H": 4, "I": 1, "J": 8,
    "K": 5, "L": 1, "M": 3, "N": 1, "O": 1,
    "P": 3, "Q": 10, "R": 1, "S": 1, "T": 1,
    "U": 1, "V": 4, "W": 4, "X": 8, "Y": 4,
    "Z": 10,
}

# Classic 4x4 dice, one "Qu" face
CLASSIC_DICE = (
    ("A", "A", "E", "E", "G", "N"),
    ("E", "L", "R", "T", "T", "Y"),
    ("A", "O", "O", "T", "T", "W"),
    ("A", "B", "B", "J", "O", "O"),
    ("E", "H", "R", "T", "V", "W"),
    ("C", "I", "M", "O", "T", "U"),
    ("D", "I", "S", "T", "T", "Y"),
    ("E", "I", "O", "S", "S", "T"),
    ("D", "E", "L", "R", "V", "Y"),
    ("A", "C", "H", "O", "P", "S"),
    ("H", "I", "M", "N", "Qu", "U"),
    ("E", "E", "I", "N", "S", "U"),
    ("E", "E", "G", "H", "N", "W"),
    ("A", "F", "F", "K", "P", "S"),
    ("H", "L", "N", "N", "R", "Z"),
    ("D", "E", "I", "L", "R", "X"),
)

# Big Boggle 5x5 dice
BIG_BOGGLE_DICE = (
    ("A", "A", "A", "F", "R", "S"),
    ("A", "A", "E", "E", "E", "E"),
    ("A", "A", "F", "I", "R", "S"),
    ("A", "D", "E", "N", "N", "N"),
    ("A", "E", "E", "E", "E", "M"),
    ("A", "E", "E", "G", "M", "U"),
    ("A", "E", "G", "M", "N", "N"),
    ("A", "F", "I", "R", "S", "Y"),
    ("B", "J", "K", "Qu", "X", "Z"),
    ("C", "C", "E", "N", "S", "T"),
    ("C", "E", "I", "I", "L", "T"),
    ("C", "E", "I", "L", "P", "T"),
    ("C", "E", "I", "P", "S", "T"),
    ("D", "D", "H", "N", "O", "T"),
    ("D", "H", "H", "L", "O", "R"),
    ("D", "H", "L", "N", "O", "R"),
    ("D", "H", "L", "N", "O", "R"),
    ("E", "I", "I", "I", "T", "T"),
    ("E", "M", "O", "T", "T", "T"),
    ("E", "N", "S", "S", "S", "U"),
    ("F", "I", "P", "R", "S", "Y"),
    ("G", "O", "R", "R", "V", "W"),
    ("I", "P", "R", "R", "R", "Y"),
    ("N", "O", "O", "T", "U", "W"),
    ("O", "O", "O", "T", "T", "U"),
)

DICE_SETS = {4: CLASSIC_DICE, 5: BIG_BOGGLE_DICE}


@dataclass(frozen=True)
class Tile:
    token: str
    display: str
    score: int


def tile_from_face(face: str) -> Tile:
    """Map a die face to a tile. The "Qu" face scores as Q alone."""
    if face.upper() == QU_TOKEN:
        return Tile(token=QU_TOKEN, display=QU_FACE, score=LETTER_SCORES["Q"])

    token = face.upper()
    score = LETTER_SCORES.get(token)
    if score is None:
        logger.warning("Face %r missing from score table, scoring 0", face)
        score = 0
    return Tile(token=token, display=token, score=score)


def validate_dice(dice) -> None:
    """Raise ValueError if any face is neither a scored letter nor "Qu"."""
    bad = sorted({
        face
        for die in dice
        for face in die
        if face.upper() != QU_TOKEN and face.upper() not in LETTER_SCORES
    })
    if bad:
        raise ValueError(f"Dice contain unknown faces: {', '.join(map(repr, bad))}")
