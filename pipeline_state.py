"""pipeline_state: tables handed from one stage to the next.
   Each stage fills its fields before the following stage reads them."""
from dataclasses import dataclass
from typing import Optional
import pandas as pd


@dataclass
class PipelineState:
    observations: Optional[pd.DataFrame] = None
    taxref: Optional[pd.DataFrame] = None
    taxref_index: Optional[object] = None
    export_frame: Optional[pd.DataFrame] = None
    unmatched_names: Optional[pd.DataFrame] = None
    geonature_path: Optional[str] = None
    taxref_path: Optional[str] = None
