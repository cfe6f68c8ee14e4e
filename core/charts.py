from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def daily_trend_chart(daily: List[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(daily, columns=["date", "count", "meal_types"])
    df["meal_types"] = df["meal_types"].apply(lambda types: "、".join(t for t in types if t) if isinstance(types, list) else "")
    hover = alt.selection_point(fields=["date"], on="mouseover", empty="all")
    return (
        alt.Chart(df)
        .mark_line(point={"filled": True, "size": 50})
        .encode(
            x=alt.X("date:O", title="日期", axis=alt.Axis(labelAngle=-45, grid=False)),
            y=alt.Y("count:Q", title="用餐次数", axis=alt.Axis(format="d", gridDash=[4, 4], domain=False, ticks=False)),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.4)),
            tooltip=[
                alt.Tooltip("date:N", title="日期"),
                alt.Tooltip("count:Q", title="次数"),
                alt.Tooltip("meal_types:N", title="类型"),
            ],
        )
        .add_params(hover)
        .properties(height=260)
    )


def monthly_trend_chart(monthly: List[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(monthly, columns=["month", "record_count", "day_count"])
    long_df = df.melt(id_vars="month", value_vars=["record_count", "day_count"], var_name="metric", value_name="value")
    long_df["metric"] = long_df["metric"].map({"record_count": "用餐次数", "day_count": "用餐天数"})
    hover = alt.selection_point(fields=["metric"], on="mouseover", empty="all")
    return (
        alt.Chart(long_df)
        .mark_bar()
        .encode(
            x=alt.X("month:O", title="月份", sort="ascending"),
            xOffset="metric:N",
            y=alt.Y("value:Q", title="数量", axis=alt.Axis(format="d", gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("metric:N", title="指标"),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.3)),
            tooltip=[
                alt.Tooltip("month:N", title="月份"),
                alt.Tooltip("metric:N", title="指标"),
                alt.Tooltip("value:Q", title="数量"),
            ],
        )
        .add_params(hover)
        .properties(height=260)
    )


def person_bar_chart(people: List[Dict[str, Any]], top_n: int = 20) -> alt.Chart:
    df = pd.DataFrame(people[:top_n], columns=["name", "record_count", "day_count"])
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("record_count:Q", title="用餐次数"),
            y=alt.Y("name:N", title="姓名", sort="-x"),
            tooltip=[
                alt.Tooltip("name:N", title="姓名"),
                alt.Tooltip("record_count:Q", title="次数"),
                alt.Tooltip("day_count:Q", title="天数"),
            ],
        )
        .properties(height=max(120, 24 * len(df)))
    )
