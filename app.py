import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Dict, List, Optional

from core.charts import daily_trend_chart, monthly_trend_chart, person_bar_chart
from core.data import build_data_context, decode_log_bytes, load_log_data, prepare_context
from core.dimensions import ALL
from core.export import EXPORT_HEADER, build_export_table, export_bytes, export_filename
from core.metrics_debug import compute_debug
from core.metrics_overview import compute_overview
from core.metrics_people import compute_people

alt.data_transformers.disable_max_rows()

PAGES = ["概览", "人员统计", "记录明细", "数据质量"]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(person: str, month: str, start: str, end: str) -> str:
    person_chip = "姓名: 全部" if person == ALL else f"姓名: {person}"
    month_chip = "月份: 全部" if month == ALL else f"月份: {month}"
    if start or end:
        range_chip = f"日期: {start or '…'} – {end or '…'}"
    else:
        range_chip = "日期: 不限"
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [person_chip, month_chip, range_chip]])


def render_page_header(title: str, filter_summary_html: str, export_data: Optional[bytes] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>用餐记录分析系统</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_data is not None:
            st.download_button("导出 CSV", data=export_data, file_name=export_name, mime="text/csv")
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def render_kpi_tiles(kpis: Dict[str, Optional[float]]):
    cols = st.columns(4)
    cols[0].metric("总记录数", f"{kpis['total_records']:,}")
    cols[1].metric("用餐天数", f"{kpis['unique_days']:,}")
    cols[2].metric("重复天数", f"{kpis['duplicate_day_count']:,}", help="同一天出现多条记录的天数")
    avg = kpis.get("avg_records_per_day")
    cols[3].metric("日均记录", f"{avg:.2f}" if avg is not None else "—")


def option_label(value: str) -> str:
    if value == ALL:
        return "全部"
    return value or "(空)"


# ---------- UI setup ----------
st.set_page_config(page_title="用餐记录分析系统", layout="wide")
inject_base_styles()
st.title("用餐记录分析系统")
st.caption("每行一条记录：姓名 日期 类型 时间，字段之间以空格分隔。")

# ----- Sidebar: input + navigation + filters -----
with st.sidebar:
    st.markdown("### 数据来源")
    uploaded = st.file_uploader("上传记录文件", type=["txt", "log", "csv"])
    pasted = st.text_area("或粘贴记录文本", "", height=120)
    with st.expander("高级设置", expanded=False):
        skip_blank = st.checkbox("忽略空行", value=False, help="默认保留空行，空行会生成一条字段全空的记录。")
        top_n = st.slider("人员排行显示数量", min_value=5, max_value=50, value=20, step=5)

if uploaded is not None:
    data_ctx = build_data_context(decode_log_bytes(uploaded.getvalue()), skip_blank=skip_blank)
elif pasted.strip():
    data_ctx = build_data_context(pasted, skip_blank=skip_blank)
else:
    data_ctx = load_log_data(skip_blank=skip_blank)

if not data_ctx.get("text"):
    st.info("请上传记录文件或粘贴记录文本。")
    st.stop()

base_ctx = prepare_context({}, data_ctx)
people: List[str] = base_ctx["people"]
months: List[str] = base_ctx["months"]
min_date, max_date = base_ctx["date_bounds"]

with st.sidebar:
    st.markdown("---")
    st.markdown("### 导航")
    current_page = st.radio("导航", PAGES, index=0, label_visibility="collapsed")

    st.markdown("---")
    st.markdown("### 筛选")
    person = st.selectbox("姓名", options=people, format_func=option_label)
    month = st.selectbox("月份", options=months, format_func=option_label)
    start_date = st.text_input("开始日期 (YYYY-MM-DD)", "", placeholder=min_date)
    end_date = st.text_input("结束日期 (YYYY-MM-DD)", "", placeholder=max_date)

filters = {
    "person": person,
    "month": month,
    "date_range": {"start": start_date, "end": end_date},
}

ctx = prepare_context(filters, data_ctx)
filt = ctx["filters"]
filtered_records = ctx["filtered_records"]
filter_summary_html = format_filter_summary(filt.person, filt.month, filt.date_range.start, filt.date_range.end)
csv_data = export_bytes(filtered_records)
csv_name = export_filename(filt.person, filt.month)


def render_overview_page():
    payload = compute_overview(filt, ctx)
    render_page_header("概览", filter_summary_html, csv_data, csv_name)
    render_kpi_tiles(payload["kpis"])
    if not payload["daily_series"]:
        st.info("当前筛选条件下没有记录。")
        return
    left, right = st.columns(2)
    with left:
        with card("每日用餐趋势"):
            st.altair_chart(daily_trend_chart(payload["daily_series"]), use_container_width=True)
    with right:
        with card("每月用餐统计"):
            st.altair_chart(monthly_trend_chart(payload["monthly_series"]), use_container_width=True)
    with card("月度明细"):
        monthly_df = pd.DataFrame(payload["monthly_series"]).rename(
            columns={"month": "月份", "record_count": "用餐次数", "day_count": "用餐天数"}
        )
        st.dataframe(monthly_df, hide_index=True, use_container_width=True)
    if payload["duplicate_days"]:
        with card("重复用餐日期"):
            dup_df = pd.DataFrame(payload["duplicate_days"])
            dup_df["meal_types"] = dup_df["meal_types"].apply(lambda types: "、".join(t for t in types if t))
            dup_df = dup_df.rename(columns={"date": "日期", "count": "记录数", "meal_types": "类型"})
            st.dataframe(dup_df, hide_index=True, use_container_width=True)


def render_people_page():
    payload = compute_people(filt, ctx, top_n=top_n)
    render_page_header("人员统计", filter_summary_html, csv_data, csv_name)
    if not payload["people"]:
        st.info("当前筛选条件下没有记录。")
        return
    st.metric("人数", payload["person_count"])
    with card(f"用餐次数排行 (前 {top_n})"):
        st.altair_chart(person_bar_chart(payload["people"], top_n=top_n), use_container_width=True)
    with card("人员明细"):
        people_df = pd.DataFrame(payload["people"]).rename(
            columns={"name": "姓名", "record_count": "用餐次数", "day_count": "用餐天数"}
        )
        st.dataframe(people_df, hide_index=True, use_container_width=True)


def render_records_page():
    render_page_header("记录明细", filter_summary_html, csv_data, csv_name)
    table = build_export_table(filtered_records)
    st.caption(f"共 {len(table):,} 条记录")
    st.dataframe(table, hide_index=True, use_container_width=True, column_order=EXPORT_HEADER)


def render_debug_page():
    payload = compute_debug(filt, ctx)
    render_page_header("数据质量", filter_summary_html)
    with card("行数"):
        st.write(payload["row_counts"])
    with card("清洗检查"):
        st.write(payload["cleaning_checks"])
    if payload["non_iso_date_sample"]:
        with card("日期格式异常 (样例)"):
            st.dataframe(pd.DataFrame(payload["non_iso_date_sample"]), hide_index=True)
    if payload["meal_type_counts"]:
        with card("类型分布"):
            types_df = pd.DataFrame(list(payload["meal_type_counts"].items()), columns=["类型", "记录数"])
            st.dataframe(types_df, hide_index=True)
    if data_ctx.get("files"):
        st.caption("数据文件: " + ", ".join(str(f) for f in data_ctx["files"]))


if current_page == "概览":
    render_overview_page()
elif current_page == "人员统计":
    render_people_page()
elif current_page == "记录明细":
    render_records_page()
else:
    render_debug_page()
