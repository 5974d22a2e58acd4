import enum
import logging

##############################
# LABEL CONSTANTS
##############################


class Label(enum.Enum):
    """The two class labels supported by the classifiers, encoded as +1 / -1 in input files."""

    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def from_value(cls, value: int) -> "Label":
        try:
            as_int = int(value)
            if as_int != value:
                raise ValueError(f"Class label {value!r} is not an integer")
            return cls(as_int)
        except (TypeError, ValueError):
            raise ValueError(f"Unsupported class label {value!r}, expected one of {[m.value for m in cls]}")


# Vote weight of each label when tallying ensemble predictions
BT_VOTE_WEIGHTS: dict[Label, int] = {
    Label.POSITIVE: 1,
    Label.NEGATIVE: -1,
}

##############################
# LOGGING CONSTANTS
##############################

BT_LOGGING_LOG_LEVEL: int = logging.INFO
BT_LOGGING_FORMAT: str = "[%(asctime)s] - %(name)s - [%(levelname)s] - %(message)s"
BT_LOGGING_MAX_BYTES: int = 10 * (1 << 20)  # 10 MB
BT_LOGGING_BACKUP_COUNT: int = 3

##############################
# MODEL CONSTANTS
##############################

# f_ratio selecting the gain ratio criterion over all attributes
BT_FULL_ATTRIBUTE_RATIO: float = 1.0

BT_DEFAULT_N_TREES: int = 15
BT_DEFAULT_FOREST_F_RATIO: float = 0.20

# "upper" clamps the forest ratio with min(f_ratio, 1), "lower" with max(f_ratio, 1)
BT_RATIO_CLAMPS: set[str] = {"upper", "lower"}
BT_DEFAULT_RATIO_CLAMP: str = "upper"

##############################
# EVALUATION CONSTANTS
##############################

BT_REPORT_F_BETAS: tuple[float, ...] = (1.0, 0.5, 2.0)
BT_REPORT_NUM_DECIMALS: int = 3
