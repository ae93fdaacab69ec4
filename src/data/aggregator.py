"""
Data aggregation module for rolling daily counts up into monthly totals.
"""
import logging
from dataclasses import dataclass
from typing import List, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

COLUMNS = ['date', 'cases', 'deaths']


@dataclass(frozen=True)
class MonthlyPoint:
    """One bar group on the chart: a month-year key and its summed counts."""

    date: str
    cases: int
    deaths: int


class MonthlyAggregator:
    """Aggregates date-keyed daily series into month-keyed summed series."""

    def aggregate(self, cases: Mapping[str, int], deaths: Mapping[str, int]) -> pd.DataFrame:
        """
        Sum the daily values of each month.

        Args:
            cases: Mapping of ``M/D/YY`` date strings to case counts
            deaths: Mapping of the same dates to death counts

        Returns:
            DataFrame with columns: date (``M/YY``), cases, deaths. Rows keep
            the order in which each month-year was first seen in ``cases``;
            no chronological sort is applied.
        """
        logger.info(f"Aggregating {len(cases)} daily records into monthly totals")

        if not cases:
            return pd.DataFrame(columns=COLUMNS)

        dates = list(cases.keys())
        df = pd.DataFrame({
            'date': dates,
            'cases': [cases[d] for d in dates],
            # dates absent from deaths contribute nothing
            'deaths': [deaths.get(d, 0) for d in dates],
        })

        # M/D/YY -> M/YY
        parts = df['date'].str.split('/')
        valid = parts.str.len() == 3
        if not valid.all():
            skipped = df.loc[~valid, 'date'].tolist()
            logger.warning(f"Skipping {len(skipped)} records with malformed dates: {skipped[:5]}")
            df = df[valid]
            parts = parts[valid]

        df = df.assign(month_year=parts.str[0] + '/' + parts.str[2])

        monthly = (
            df.groupby('month_year', sort=False)
            .agg(cases=('cases', 'sum'), deaths=('deaths', 'sum'))
            .reset_index()
            .rename(columns={'month_year': 'date'})
        )

        self._log_summary(monthly)

        return monthly[COLUMNS]

    @staticmethod
    def to_points(monthly: pd.DataFrame) -> List[MonthlyPoint]:
        """Convert an aggregated frame into MonthlyPoint records, keeping row order."""
        return [
            MonthlyPoint(date=row['date'], cases=row['cases'], deaths=row['deaths'])
            for row in monthly[COLUMNS].to_dict('records')
        ]

    def _log_summary(self, df: pd.DataFrame):
        logger.info("Aggregation summary:")
        logger.info(f"  - Months: {len(df)}")
        if len(df) > 0:
            logger.info(f"  - First month seen: {df['date'].iloc[0]}")
            logger.info(f"  - Last month seen: {df['date'].iloc[-1]}")
