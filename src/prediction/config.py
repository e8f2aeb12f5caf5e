"""
Config loader for WristType.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import yaml


@dataclass
class LayoutConfig:
    width: int = 320
    height: int = 320
    top_margin: int = 40            # Extra room above the suggestion strip
    tap_flexibility: float = 0.8    # Tap SD in key widths
    row_stretch: Tuple[float, float, float] = (1.0, 1.1, 0.9)

    def __post_init__(self):
        self.row_stretch = tuple(float(s) for s in self.row_stretch)
        if len(self.row_stretch) != 3:
            raise ValueError("row_stretch needs one value per keyboard row (3)")


@dataclass
class PredictorConfig:
    beam_width: int = 5                 # Hypotheses kept between taps
    suggestion_count: int = 3           # Suggestions returned per tap
    tap_floor: float = 0.001            # Ignore keys less likely than this
    candidate_floor: float = 0.00001    # Ignore tap*LM products below this
    max_context: int = 7                # Longest n-gram context


@dataclass
class CorpusConfig:
    use_common_words: bool = True
    extra_paths: List[str] = field(default_factory=list)


@dataclass
class Config:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    predictor: PredictorConfig = field(default_factory=PredictorConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        layout=_dict_to_dataclass(LayoutConfig, data.get('layout')),
        predictor=_dict_to_dataclass(PredictorConfig, data.get('predictor')),
        corpus=_dict_to_dataclass(CorpusConfig, data.get('corpus')),
    )
