"""Built-in name tables (simplified Chinese)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class NameTables:
    lunar_months: Tuple[str, ...]
    lunar_days: Tuple[str, ...]
    leap_prefix: str
    traditional_festivals: Tuple[str, ...]
    gregorian_festivals: Tuple[str, ...]
    special_festivals: Tuple[str, ...]
    solar_terms: Tuple[str, ...]
    stems: Tuple[str, ...]
    branches: Tuple[str, ...]
    zodiac: Tuple[str, ...]
    month_names: Tuple[str, ...]
    weekday_names: Tuple[str, ...]

    def __post_init__(self) -> None:
        sizes = {
            "lunar_months": (self.lunar_months, 12),
            "lunar_days": (self.lunar_days, 30),
            "special_festivals": (self.special_festivals, 3),
            "solar_terms": (self.solar_terms, 24),
            "stems": (self.stems, 10),
            "branches": (self.branches, 12),
            "zodiac": (self.zodiac, 12),
            "month_names": (self.month_names, 12),
            "weekday_names": (self.weekday_names, 7),
        }
        for name, (table, n) in sizes.items():
            if len(table) != n:
                raise ValueError(f"{name} needs {n} entries, got {len(table)}")


ZH_CN = NameTables(
    lunar_months=("正月", "二月", "三月", "四月", "五月", "六月",
                  "七月", "八月", "九月", "十月", "冬月", "腊月"),
    lunar_days=("初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
                "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
                "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十"),
    leap_prefix="闰",
    # index 0 is New Year's Eve (last day of the twelfth month, no fixed MMDD)
    traditional_festivals=("除夕", "0101春节", "0115元宵", "0202龙抬头", "0505端午",
                           "0707七夕", "0715中元", "0815中秋", "0909重阳", "1208腊八", "1223小年"),
    gregorian_festivals=("0101元旦", "0214情人节", "0308妇女节", "0312植树节", "0315消费者权益日",
                         "0401愚人节", "0501劳动节", "0504青年节", "0601儿童节", "0701建党节",
                         "0801建军节", "0910教师节", "1001国庆节", "1224平安夜", "1225圣诞节"),
    # Mother's Day, Father's Day, Thanksgiving
    special_festivals=("母亲节", "父亲节", "感恩节"),
    solar_terms=("小寒", "大寒", "立春", "雨水", "惊蛰", "春分", "清明", "谷雨",
                 "立夏", "小满", "芒种", "夏至", "小暑", "大暑", "立秋", "处暑",
                 "白露", "秋分", "寒露", "霜降", "立冬", "小雪", "大雪", "冬至"),
    stems=("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸"),
    branches=("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥"),
    zodiac=("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪"),
    month_names=("一月", "二月", "三月", "四月", "五月", "六月",
                 "七月", "八月", "九月", "十月", "十一月", "十二月"),
    weekday_names=("日", "一", "二", "三", "四", "五", "六"),
)
