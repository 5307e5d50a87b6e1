"""Built-in journal rule catalog."""

from typing import Iterable, Iterator, List, Optional

from finformatter.core.paper import Journal, JournalRules

CHINESE_HEADINGS = ["一、", "（一）", "1."]
ROMAN_HEADINGS = ["I.", "A.", "1."]

JOURNALS: List[Journal] = [
    # Chinese core journals (CSSCI, policy focus)
    Journal(
        id="erj",
        name="经济研究 (Economic Research Journal)",
        rules=JournalRules(
            title_limit=20,
            abstract_limit=300,
            heading_sequence=CHINESE_HEADINGS,
            font="SimSun",
            citation="中国社会科学参考文献规范",
            references_rule="中文在前英文在后；按作者姓氏拼音排序；需包含DOI（若有）。",
            table_fig_rule="标准三线表；表名居中在上方，图名居中在下方；数据来源注于图表左下方。",
            math_rule="变量斜体，常量正体；公式右对齐编号。",
            footnote_rule="页下脚注，每页重新编号；首页星注包含作者贡献声明。",
            other_rule="必须提供中英文JEL分类号（至少两个）。",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    Journal(
        id="mw",
        name="管理世界 (Management World)",
        rules=JournalRules(
            title_limit=25,
            abstract_limit=400,
            heading_sequence=CHINESE_HEADINGS,
            font="SimSun",
            citation="著者-出版年制",
            references_rule="文中引用为（张三，2023）；末尾参考文献按字母序排列。",
            table_fig_rule="移除所有纵线；表头底线加粗；支持彩色图表。",
            math_rule="字母变量斜体；向量与矩阵用粗斜体（Bold Italic）。",
            footnote_rule="脚注全文连续编号；置于页面底部。",
            other_rule="摘要需强调政策启示与现实意义。",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    Journal(
        id="jfr",
        name="金融研究 (Journal of Financial Research)",
        rules=JournalRules(
            title_limit=20,
            abstract_limit=300,
            heading_sequence=CHINESE_HEADINGS,
            font="SimSun",
            citation="GB/T 7714-2015",
            references_rule="顺序编码制或著者-出版年制均可，需全篇统一。",
            table_fig_rule="表格需具有自明性；复杂的数学推导建议放附录。",
            math_rule="希腊字母正体，英文字母变量斜体。",
            footnote_rule="首页脚注需注明通讯作者及其邮箱。",
            other_rule="投稿需附带原始数据说明。",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    Journal(
        id="ssic",
        name="中国社会科学 (Social Sciences in China)",
        rules=JournalRules(
            title_limit=18,
            abstract_limit=300,
            heading_sequence=CHINESE_HEADINGS,
            font="SimSun",
            citation="中社科专属规范",
            references_rule="注释与参考文献合并，采用页下脚注形式。",
            table_fig_rule="三线表；尽量避免使用大幅彩色图表。",
            math_rule="公式需用MathType或LaTeX转化，确保无乱码。",
            footnote_rule="采用①②③连续编号。",
            other_rule="政治站位要求高，术语需标准化。",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    # International top-tier journals (SSCI)
    Journal(
        id="aer",
        name="American Economic Review (AER)",
        rules=JournalRules(
            title_limit=15,
            abstract_limit=100,
            heading_sequence=ROMAN_HEADINGS,
            font="Times New Roman",
            citation="Chicago Manual of Style",
            references_rule="Strict alphabetical order; DOI mandatory.",
            table_fig_rule="Minimalist; no vertical lines; distinct panel headers (Panel A, Panel B).",
            math_rule="Variables italicized; matrices bold; equations numbered on right.",
            footnote_rule="Use sparingly; end-of-page numbering.",
            other_rule="Strong focus on identification strategy and data transparency.",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    Journal(
        id="jf",
        name="Journal of Finance (JF)",
        rules=JournalRules(
            title_limit=15,
            abstract_limit=150,
            heading_sequence=ROMAN_HEADINGS,
            font="Times New Roman",
            citation="APA 7th",
            references_rule="Standard APA format; all URLs must be live.",
            table_fig_rule="No shading in tables; font size in tables can be 9pt.",
            math_rule="Bold italic for vectors; distinct subscripts.",
            footnote_rule="Numeric footnotes; first page contains disclaimer.",
            other_rule="JEL Classification required.",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
    Journal(
        id="jpe",
        name="Journal of Political Economy (JPE)",
        rules=JournalRules(
            title_limit=12,
            abstract_limit=100,
            heading_sequence=["1.", "1.1.", "1.1.1."],
            font="Times New Roman",
            citation="JPE Style",
            references_rule="Authors' names in small caps in the bibliography.",
            table_fig_rule="Rigorous labeling; standard black/white format preferred.",
            math_rule="High precision math typesetting; use LaTeX symbols.",
            footnote_rule="Substantive footnotes only.",
            other_rule="Very strict on word count for the entire manuscript.",
            use_three_line_table=True,
            variable_italic=True,
        ),
    ),
]


class RuleCatalog:
    """Read-only lookup from journal id to its rule set.

    The first entry is the default, returned by :meth:`get` for unknown ids.
    """

    def __init__(self, journals: Optional[Iterable[Journal]] = None):
        """Initialize catalog.

        Args:
            journals: Catalog entries in display order. Defaults to the
                built-in journals.

        Raises:
            ValueError: If the catalog is empty or ids are duplicated.
        """
        self._journals = list(JOURNALS if journals is None else journals)
        if not self._journals:
            raise ValueError("Journal catalog must contain at least one journal")

        self._by_id = {journal.id.lower(): journal for journal in self._journals}
        if len(self._by_id) != len(self._journals):
            raise ValueError("Journal catalog contains duplicate ids")

    @property
    def default(self) -> Journal:
        return self._journals[0]

    def find(self, journal_id: Optional[str]) -> Optional[Journal]:
        """Return the journal with this id, or None."""
        if journal_id is None:
            return None
        return self._by_id.get(journal_id.strip().lower())

    def get(self, journal_id: Optional[str]) -> Journal:
        """Return the journal with this id, falling back to the default entry."""
        return self.find(journal_id) or self.default

    def ids(self) -> List[str]:
        return [journal.id for journal in self._journals]

    def __iter__(self) -> Iterator[Journal]:
        return iter(self._journals)

    def __len__(self) -> int:
        return len(self._journals)

    def __contains__(self, journal_id: object) -> bool:
        return isinstance(journal_id, str) and self.find(journal_id) is not None
