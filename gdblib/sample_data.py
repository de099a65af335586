"""
Employee sample dataset.

| OBJECTID | Name | Email           | Shape                  |
| -------- | ---- | --------------- | ---------------------- |
| 1        | Bob  | bob@google.com  | POINT(25.7837 71.1710) |
| 2        | John | john@google.com | POINT(25.7837 71.1710) |

Both employees sit at North Cape (71.1710° N, 25.7837° E), WGS84.
"""

from pathlib import Path
from typing import Union

from .models import DatasetSpec, FieldDefinition, FieldType, LayerSchema, Point2D, Record

__all__ = ["NORTH_CAPE", "EMPLOYEE_FIELDS", "employee_dataset_spec"]

NORTH_CAPE = Point2D(x=25.7837, y=71.1710)

EMPLOYEE_FIELDS = [
    FieldDefinition(name="Name", type=FieldType.STRING),
    FieldDefinition(name="Email", type=FieldType.STRING),
]


def employee_dataset_spec(
    output_path: Union[str, Path],
    layer_name: str = "Employee",
    srs: Union[int, str] = 4326,
    driver: str = "OpenFileGDB",
) -> DatasetSpec:
    """Spec for the two-employee sample layer written to ``output_path``."""
    return DatasetSpec(
        output_path=output_path,
        driver=driver,
        layer=LayerSchema(
            name=layer_name,
            srs=srs,
            fields=EMPLOYEE_FIELDS,
        ),
        records=[
            Record(attributes={"Name": "Bob", "Email": "bob@google.com"}, point=NORTH_CAPE),
            Record(attributes={"Name": "John", "Email": "john@google.com"}, point=NORTH_CAPE),
        ],
    )
