"""Query exported replay tables - accuracy per saber."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python query.py <tables_dir> [min_rating]")
        print("Example: python query.py tables/ 0.8")
        sys.exit(1)

    tables = Path(sys.argv[1])
    min_rating = float(sys.argv[2]) if len(sys.argv) > 2 else 0.0

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW notes AS SELECT * FROM '{tables}/notes.parquet'")

    # Good and bad cuts only; misses and bombs carry no saber.
    sql = """
    SELECT
        saber_type,
        COUNT(*) AS cuts,
        AVG(before_cut_rating) AS before_rating,
        AVG(after_cut_rating) AS after_rating,
        AVG(ABS(time_deviation)) AS timing_error
    FROM notes
    WHERE event_type IN (0, 1)
      AND before_cut_rating >= ?
    GROUP BY saber_type
    ORDER BY saber_type
    """

    print(f"--- Cut accuracy: {tables} ---")
    print(f"--- before_cut_rating >= {min_rating} ---\n")

    df = con.execute(sql, [min_rating]).fetchdf()
    if df.empty:
        print("No cuts found.")
    else:
        for _, row in df.iterrows():
            saber = "left" if row["saber_type"] == 0 else "right"
            print(f"SABER: {saber}")
            print(f"  Cuts: {int(row['cuts'])}")
            print(f"  Rating: {row['before_rating']:.3f} / {row['after_rating']:.3f}")
            print(f"  Timing error: {row['timing_error'] * 1000:.1f} ms")
            print()


if __name__ == "__main__":
    main()
