"""
Join the four normalized tables into denormalized Property records.

Variants drive the join: each variant resolves configuration → project →
address. A variant whose chain breaks anywhere is dropped and counted in the
MergeReport. Output order is variant file order.
"""
from __future__ import annotations

import pandas as pd

from propsearch.config import (
    PROJECT_COLUMNS, ADDRESS_COLUMNS, CONFIGURATION_COLUMNS, VARIANT_COLUMNS,
)
from propsearch.data.normalize import normalize_columns, dedupe_lookup, parse_int_column, parse_image_list
from propsearch.data.schemas import MergeReport, Property


def _as_frame(rows: pd.DataFrame | list[dict[str, str]], column_map: dict[str, str]) -> pd.DataFrame:
    df = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows), columns=list(column_map))
    # Absent cells become "" so they never join against each other as NaN keys
    return normalize_columns(df, column_map).fillna("")


def _resolve(left: pd.DataFrame, lookup: pd.DataFrame, key: str) -> tuple[pd.DataFrame, int]:
    """Left-join a lookup table and drop rows without a match.

    Returns (matched rows in left order, number of unmatched rows).
    """
    joined = left.merge(lookup, on=key, how="left", indicator="_match", validate="many_to_one", sort=False)
    hit = joined["_match"] == "both"
    return joined[hit].drop(columns="_match"), int((~hit).sum())


def merge_tables(
    projects: pd.DataFrame | list[dict[str, str]],
    addresses: pd.DataFrame | list[dict[str, str]],
    configurations: pd.DataFrame | list[dict[str, str]],
    variants: pd.DataFrame | list[dict[str, str]],
) -> tuple[list[Property], MergeReport]:
    """Build Property records from raw table rows (frames or lists of dicts)."""
    project_df = dedupe_lookup(_as_frame(projects, PROJECT_COLUMNS), "project_id")
    address_df = dedupe_lookup(_as_frame(addresses, ADDRESS_COLUMNS), "project_id")
    config_df = dedupe_lookup(_as_frame(configurations, CONFIGURATION_COLUMNS), "configuration_id")
    variant_df = _as_frame(variants, VARIANT_COLUMNS).reset_index(drop=True)

    report = MergeReport(variants=len(variant_df))

    # Only the columns each hop contributes, so no name collides across tables
    df, report.missing_configuration = _resolve(
        variant_df, config_df[["configuration_id", "project_id", "unit_type"]], "configuration_id",
    )
    df, report.missing_project = _resolve(
        df, project_df[["project_id", "project_name", "status", "possession_date"]], "project_id",
    )
    df, report.missing_address = _resolve(
        df, address_df[["project_id", "full_address", "pincode"]], "project_id",
    )

    prices, report.bad_price = parse_int_column(df["price"])
    bathrooms, report.bad_bathrooms = parse_int_column(df["bathrooms"])
    df = df.assign(price=prices.to_numpy(), bathrooms=bathrooms.to_numpy())

    properties: list[Property] = []
    for row in df.to_dict(orient="records"):
        images, ok = parse_image_list(row["property_images"])
        if not ok:
            report.bad_images += 1
        properties.append(Property(
            id=row["id"],
            project_id=row["project_id"],
            project_name=row["project_name"],
            status=row["status"],
            possession_date=row["possession_date"],
            full_address=row["full_address"],
            pincode=row["pincode"],
            unit_type=row["unit_type"],
            price=int(row["price"]),
            bathrooms=int(row["bathrooms"]),
            carpet_area=row["carpet_area"],
            about_property=row["about_property"],
            floor_plan_image=row["floor_plan_image"],
            property_images=images,
        ))

    report.merged = len(properties)
    return properties, report
