"""
Bundled reference training sets.

Small labeled excerpts of the public datasets each calibration table was built
against. Rows are laid out in feature order with the label last; categorical
columns are already encoded (kidney: abnormal/yes/ckd = 1, breast: M = 1).
"""
from typing import Dict, List, Sequence, Tuple

from .base import DiseaseKey, TrainingRecord


Row = Tuple[float, ...]


CARDIAC_ROWS: Tuple[Row, ...] = (
    (63, 1, 3, 145, 233, 1, 0, 150, 0, 2.3, 0, 0, 1, 1),
    (37, 1, 2, 130, 250, 0, 1, 187, 0, 3.5, 0, 0, 2, 1),
    (41, 0, 1, 130, 204, 0, 0, 172, 0, 1.4, 2, 0, 2, 1),
    (56, 1, 1, 120, 236, 0, 1, 178, 0, 0.8, 2, 0, 2, 1),
    (57, 0, 0, 120, 354, 0, 1, 163, 1, 0.6, 2, 0, 2, 1),
    (57, 1, 0, 140, 192, 0, 1, 148, 0, 0.4, 1, 0, 1, 1),
    (56, 0, 1, 140, 294, 0, 0, 153, 0, 1.3, 1, 0, 2, 1),
    (44, 1, 1, 120, 263, 0, 1, 173, 0, 0, 2, 0, 3, 1),
    (52, 1, 2, 172, 199, 1, 1, 162, 0, 0.5, 2, 0, 3, 1),
    (57, 1, 2, 150, 168, 0, 1, 174, 0, 1.6, 2, 0, 2, 1),
    (54, 1, 0, 140, 239, 0, 1, 160, 0, 1.2, 2, 0, 2, 1),
    (48, 0, 2, 130, 275, 0, 1, 139, 0, 0.2, 2, 0, 2, 1),
    (49, 1, 1, 130, 266, 0, 1, 171, 0, 0.6, 2, 0, 2, 1),
    (64, 1, 3, 110, 211, 0, 0, 144, 1, 1.8, 1, 0, 2, 1),
    (58, 0, 3, 150, 283, 1, 0, 162, 0, 1, 2, 0, 2, 1),
    (50, 0, 2, 120, 219, 0, 1, 158, 0, 1.6, 1, 0, 2, 1),
    (58, 0, 2, 120, 340, 0, 1, 172, 0, 0, 2, 0, 2, 1),
    (66, 0, 3, 150, 226, 0, 1, 114, 0, 2.6, 0, 0, 2, 1),
    (43, 1, 0, 150, 247, 0, 1, 171, 0, 1.5, 2, 0, 2, 1),
    (69, 0, 3, 140, 239, 0, 1, 151, 0, 1.8, 2, 2, 2, 1),
    (59, 1, 0, 135, 234, 0, 1, 161, 0, 0.5, 1, 0, 3, 0),
    (44, 1, 2, 130, 233, 0, 1, 179, 1, 0.4, 2, 0, 2, 0),
    (42, 1, 0, 140, 226, 0, 1, 178, 0, 0, 2, 0, 2, 0),
    (61, 1, 2, 150, 243, 1, 1, 137, 1, 1, 1, 0, 2, 0),
    (40, 1, 3, 140, 199, 0, 1, 178, 1, 1.4, 2, 0, 3, 0),
    (71, 0, 1, 160, 302, 0, 1, 162, 0, 0.4, 2, 2, 2, 0),
    (59, 1, 2, 150, 212, 1, 1, 157, 0, 1.6, 2, 0, 2, 0),
    (51, 1, 2, 110, 175, 0, 1, 123, 0, 0.6, 2, 0, 2, 0),
    (65, 0, 2, 140, 417, 1, 0, 157, 0, 0.8, 2, 1, 2, 0),
    (53, 1, 2, 130, 197, 1, 0, 152, 0, 1.2, 0, 0, 2, 0),
)

METABOLIC_ROWS: Tuple[Row, ...] = (
    (6, 148, 72, 35, 0, 33.6, 0.627, 50, 1),
    (1, 85, 66, 29, 0, 26.6, 0.351, 31, 0),
    (8, 183, 64, 0, 0, 23.3, 0.672, 32, 1),
    (1, 89, 66, 23, 94, 28.1, 0.167, 21, 0),
    (0, 137, 40, 35, 168, 43.1, 2.288, 33, 1),
    (5, 116, 74, 0, 0, 25.6, 0.201, 30, 0),
    (3, 78, 50, 32, 88, 31.0, 0.248, 26, 1),
    (10, 115, 0, 0, 0, 35.3, 0.134, 29, 0),
    (2, 197, 70, 45, 543, 30.5, 0.158, 53, 1),
    (8, 125, 96, 0, 0, 0.0, 0.232, 54, 1),
    (4, 110, 92, 0, 0, 37.6, 0.191, 30, 0),
    (10, 168, 74, 0, 0, 38.0, 0.537, 34, 1),
    (10, 139, 80, 0, 0, 27.1, 1.441, 57, 0),
    (1, 189, 60, 23, 846, 30.1, 0.398, 59, 1),
    (5, 166, 72, 19, 175, 25.8, 0.587, 51, 1),
    (7, 100, 0, 0, 0, 30.0, 0.484, 32, 1),
    (0, 118, 84, 47, 230, 45.8, 0.551, 31, 1),
    (7, 107, 74, 0, 0, 29.6, 0.254, 31, 1),
    (1, 103, 30, 38, 83, 43.3, 0.183, 33, 0),
    (1, 115, 70, 30, 96, 34.6, 0.529, 32, 1),
    (3, 126, 88, 41, 235, 39.3, 0.704, 27, 0),
    (8, 99, 84, 0, 0, 35.4, 0.388, 50, 0),
    (7, 196, 90, 0, 0, 39.8, 0.451, 41, 1),
    (9, 119, 80, 35, 0, 29.0, 0.263, 29, 1),
    (11, 143, 94, 33, 146, 36.6, 0.254, 51, 1),
    (10, 125, 70, 26, 115, 31.1, 0.205, 41, 1),
    (7, 147, 76, 0, 0, 39.4, 0.257, 43, 1),
    (1, 97, 66, 15, 140, 23.2, 0.487, 22, 0),
    (13, 145, 82, 19, 110, 22.2, 0.245, 57, 0),
    (5, 117, 92, 0, 0, 34.1, 0.337, 38, 0),
)

RENAL_ROWS: Tuple[Row, ...] = (
    (48, 80, 1.020, 1, 0, 0, 121, 36, 1.2, 15.4, 7800, 1, 1, 1),
    (53, 90, 1.020, 2, 0, 1, 92, 53, 1.8, 9.6, 6900, 1, 0, 1),
    (63, 70, 1.010, 3, 0, 1, 380, 60, 2.7, 7.7, 3800, 1, 1, 1),
    (68, 80, 1.010, 3, 2, 0, 157, 90, 4.1, 7.1, 9800, 1, 1, 1),
    (61, 80, 1.015, 2, 0, 1, 173, 148, 3.9, 9.8, 7300, 1, 1, 1),
    (48, 70, 1.020, 4, 0, 1, 95, 163, 7.7, 11.3, 6000, 1, 0, 1),
    (69, 70, 1.010, 3, 4, 1, 264, 87, 2.7, 12.2, 5800, 1, 1, 1),
    (73, 80, 1.020, 0, 0, 0, 253, 142, 4.6, 15.4, 6700, 1, 1, 1),
    (25, 80, 1.020, 0, 0, 0, 75, 21, 1.0, 14.7, 9200, 0, 0, 0),
    (45, 70, 1.015, 0, 0, 0, 117, 15, 0.8, 13.5, 7500, 0, 0, 0),
    (38, 70, 1.020, 0, 0, 0, 104, 18, 0.9, 15.2, 6200, 0, 0, 0),
    (42, 80, 1.020, 0, 0, 0, 89, 17, 0.7, 16.1, 7300, 0, 0, 0),
    (35, 80, 1.015, 0, 0, 0, 92, 19, 1.1, 13.9, 8100, 0, 0, 0),
    (58, 80, 1.020, 1, 0, 0, 131, 28, 1.4, 12.4, 6800, 1, 0, 1),
    (71, 80, 1.015, 2, 0, 1, 162, 54, 2.1, 10.2, 4900, 1, 1, 1),
)

HEPATIC_ROWS: Tuple[Row, ...] = (
    (65, 1, 0.7, 0.1, 187, 16, 18, 6.8, 3.3, 0.90, 1),
    (62, 0, 10.9, 5.5, 699, 64, 100, 7.5, 3.2, 0.74, 1),
    (47, 0, 0.9, 0.3, 192, 60, 68, 7.0, 3.2, 0.84, 1),
    (58, 1, 0.9, 0.2, 182, 14, 20, 6.8, 3.4, 1.00, 1),
    (72, 0, 3.9, 1.3, 928, 29, 42, 8.7, 4.2, 0.93, 1),
    (46, 0, 1.8, 0.7, 417, 23, 35, 6.7, 3.3, 0.98, 1),
    (54, 1, 0.7, 0.2, 193, 16, 25, 7.1, 3.8, 1.15, 1),
    (32, 0, 0.9, 0.3, 277, 20, 45, 6.5, 3.0, 0.85, 1),
    (38, 1, 0.7, 0.2, 204, 41, 52, 7.2, 3.5, 0.95, 1),
    (44, 0, 11.3, 5.8, 1600, 233, 225, 7.9, 3.1, 0.68, 1),
    (24, 0, 0.7, 0.2, 216, 32, 48, 7.3, 3.9, 1.14, 0),
    (32, 1, 0.8, 0.2, 208, 22, 30, 6.9, 3.5, 1.03, 0),
    (36, 0, 0.6, 0.1, 228, 18, 24, 7.2, 3.8, 1.11, 0),
    (42, 1, 0.7, 0.2, 195, 19, 28, 7.0, 3.6, 1.05, 0),
    (28, 0, 0.8, 0.3, 204, 25, 35, 6.8, 3.4, 1.00, 0),
)

ONCOLOGIC_ROWS: Tuple[Row, ...] = (
    (17.99, 10.38, 122.8, 1001, 0.1184, 0.2776, 0.3001, 0.1471, 0.2419, 0.07871, 1),
    (20.57, 17.77, 132.9, 1326, 0.08474, 0.07864, 0.0869, 0.07017, 0.1812, 0.05667, 1),
    (19.69, 21.25, 130, 1203, 0.1096, 0.1599, 0.1974, 0.1279, 0.2069, 0.05999, 1),
    (11.42, 20.38, 77.58, 386.1, 0.1425, 0.2839, 0.2414, 0.1052, 0.2597, 0.09744, 1),
    (20.29, 14.34, 135.1, 1297, 0.1003, 0.1328, 0.198, 0.1043, 0.1809, 0.05883, 1),
    (12.45, 15.7, 82.57, 477.1, 0.1278, 0.17, 0.1578, 0.08089, 0.2087, 0.07613, 1),
    (18.25, 19.98, 119.6, 1040, 0.09463, 0.109, 0.1127, 0.074, 0.1794, 0.05742, 1),
    (13.71, 20.83, 90.2, 577.9, 0.1189, 0.1645, 0.09366, 0.05985, 0.2196, 0.07451, 1),
    (13, 21.82, 87.5, 519.8, 0.1273, 0.1932, 0.1859, 0.09353, 0.235, 0.07389, 1),
    (12.46, 24.04, 83.97, 475.9, 0.1186, 0.2396, 0.2273, 0.08543, 0.203, 0.08243, 1),
    (13.08, 15.71, 85.63, 520, 0.1075, 0.127, 0.04568, 0.0311, 0.1967, 0.06811, 0),
    (9.504, 12.44, 60.34, 273.9, 0.1024, 0.06492, 0.02956, 0.02076, 0.1815, 0.06905, 0),
    (12.04, 18.02, 77.66, 446.7, 0.09746, 0.06987, 0.01628, 0.01311, 0.1863, 0.06643, 0),
    (11.28, 13.39, 73, 384.8, 0.1164, 0.1136, 0.04635, 0.04796, 0.1771, 0.06072, 0),
    (9.738, 11.97, 61.24, 288.5, 0.092, 0.04062, 0, 0, 0.1809, 0.05883, 0),
)

_ROWS_BY_KEY: Dict[DiseaseKey, Sequence[Row]] = {
    DiseaseKey.CARDIAC: CARDIAC_ROWS,
    DiseaseKey.METABOLIC: METABOLIC_ROWS,
    DiseaseKey.RENAL: RENAL_ROWS,
    DiseaseKey.HEPATIC: HEPATIC_ROWS,
    DiseaseKey.ONCOLOGIC: ONCOLOGIC_ROWS,
}


def to_records(rows: Sequence[Row]) -> List[TrainingRecord]:
    """Split label-last rows into TrainingRecords."""
    return [TrainingRecord(features=tuple(row[:-1]), label=int(row[-1])) for row in rows]


def sample_records(key: DiseaseKey) -> List[TrainingRecord]:
    return to_records(_ROWS_BY_KEY[key])


def sample_training_sets() -> Dict[DiseaseKey, List[TrainingRecord]]:
    """Bundled rows for every disease model."""
    return {key: to_records(rows) for key, rows in _ROWS_BY_KEY.items()}
