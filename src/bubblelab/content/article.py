from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum


class Language(str, Enum):
    ZH = "zh"
    EN = "en"


@dataclass(frozen=True)
class Topic:
    title: str
    body: str


@dataclass(frozen=True)
class ArticleText:
    nav_intro: str
    nav_lab: str
    nav_conclusion: str
    journal_badge: str
    hero_kicker: str
    hero_title: str
    hero_subtitle: str
    byline: str
    intro_heading: str
    quote: str
    quote_author: str
    lede: str
    intro_topics: tuple[Topic, Topic, Topic]
    lab_kicker: str
    lab_heading: str
    lab_blurb: str
    tab_mechanics: str
    tab_geometry: str
    tab_optics: str
    mechanics_title: str
    airflow_label: str
    collapse_notice: str
    geometry_title: str
    geometry_blurb: str
    optics_title: str
    optics_blurb: str
    conclusion_heading: str
    conclusion_body: str
    more_topics: tuple[Topic, Topic, Topic]
    footer_title: str
    footer_credit: str

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, str) and not value.strip():
                msg = f"{item.name} must not be empty"
                raise ValueError(msg)


_ZH = ArticleText(
    nav_intro="導讀",
    nav_lab="虛擬實驗室",
    nav_conclusion="結語",
    journal_badge="科學發展月刊",
    hero_kicker="專題報導",
    hero_title="冒泡的美",
    hero_subtitle="The Beauty of Bubbles",
    byline="傅宗玫、陳正平 ／ 台灣大學大氣科學研究所",
    intro_heading="前言",
    quote="「請吹一個泡泡，並好好觀察它。你可以窮一生之力對它進行研究，而不斷獲得物理學的知識。」",
    quote_author="Lord Kelvin (1824-1907)",
    lede=(
        "應該很少人小時候不愛吹肥皂泡泡的吧！陽光燦爛的午後，看著一個個球形出現，隨著微風飄舞。"
        "泡泡既完美又脆弱的特質，和泡膜上反射出的斑斕色彩，都令人深深著迷。"
        "然而，這美麗的背後隱藏著深刻的物理、化學與數學原理。"
    ),
    intro_topics=(
        Topic(
            "泡膜力學",
            "為什麼吹出來的泡泡會呈完美的球形？這源於表面張力傾向於採取最小表面積的特性。"
            "而當兩個大小不同的泡泡連通時，空氣流動的方向往往違反直覺——"
            "這正是我們將在實驗室中探索的「連通管悖論」。",
        ),
        Topic(
            "幾何結構",
            "當多個泡泡聚集時，它們會遵循普拉圖定律 (Plateau's Laws) 自動形成特定的幾何結構。"
            "泡膜總是尋找能量最低的狀態，透過數學模型，我們可以證明這些結構是連接多點的最短路徑。",
        ),
        Topic(
            "光學干涉",
            "泡膜上的彩虹並非來自色素，而是薄膜干涉的結果。光線在薄膜上下表面反射並相互作用，"
            "隨著重力使膜厚改變，顏色也隨之產生迷人的動態變化。",
        ),
    ),
    lab_kicker="Interactive Laboratory",
    lab_heading="泡泡科學實驗室",
    lab_blurb="從數學模型到物理現象，透過互動模擬深入了解泡泡的奧秘。請選擇下方頁籤開始探索。",
    tab_mechanics="泡膜力學",
    tab_geometry="幾何結構",
    tab_optics="光學干涉",
    mechanics_title="實驗一：連通泡泡",
    airflow_label="氣流方向",
    collapse_notice="泡泡已經縮到破裂。請重設或調整半徑後再試一次。",
    geometry_title="實驗二：幾何結構",
    geometry_blurb=(
        "普拉圖問題 (Plateau's Problem)：尋找連接這些點的最小總長度。自然界傾向於最小能量狀態。"
    ),
    optics_title="實驗三：干涉色彩",
    optics_blurb=(
        "泡膜的顏色並非來自色素，而是光在薄膜上下表面反射後產生的干涉現象。"
        "厚度決定了哪些顏色的光被增強或抵消。"
    ),
    conclusion_heading="結語",
    conclusion_body=(
        "透過許多科學家在物理、化學、數學和生物學方面的研究，我們對於泡泡、表面相關問題終於有了較多的瞭解。"
        "今日，不論學術界和工業界對於「表面」現象仍然非常重視，"
        "包括物質表面的原子排列和化學反應機制及其應用，都是方興未艾的研究課題。"
    ),
    more_topics=(
        Topic("海沫 (Sea Spray)", "氣候影響與凝結核"),
        Topic("生命起源", "脂類分子與原始細胞"),
        Topic("泡泡配方", "甘油與表面張力"),
    ),
    footer_title="Bubble Science",
    footer_credit=(
        'Based on "The Beauty of Bubbles", Science Development Journal Vol 29 No 11.'
    ),
)

_EN = ArticleText(
    nav_intro="Introduction",
    nav_lab="Virtual Lab",
    nav_conclusion="Conclusion",
    journal_badge="Science Development Monthly",
    hero_kicker="Feature",
    hero_title="The Beauty of Bubbles",
    hero_subtitle="冒泡的美",
    byline="Tzung-May Fu, Jen-Ping Chen / Graduate Institute of Atmospheric Sciences, NTU",
    intro_heading="Foreword",
    quote=(
        '"Blow a soap bubble and observe it. You may study it all your life, '
        'and draw one lesson after another in physics from it."'
    ),
    quote_author="Lord Kelvin (1824-1907)",
    lede=(
        "Few of us did not love blowing soap bubbles as children: sunny afternoons, one sphere "
        "after another drifting off on the breeze. Their fragile perfection and the shimmering "
        "colours on the film are endlessly fascinating, and behind that beauty sit deep "
        "principles of physics, chemistry and mathematics."
    ),
    intro_topics=(
        Topic(
            "Film mechanics",
            "Why is a blown bubble a perfect sphere? Surface tension pulls the film towards the "
            "smallest possible area. Connect two bubbles of different size and the air flows the "
            'opposite way to what intuition says: the "connected bubble paradox" we explore in '
            "the lab.",
        ),
        Topic(
            "Geometry",
            "When bubbles cluster they arrange themselves by Plateau's laws. The films always seek "
            "the lowest-energy state, and a little mathematics shows that the resulting networks "
            "are the shortest paths joining the points.",
        ),
        Topic(
            "Interference",
            "The rainbow on a bubble is not pigment but thin-film interference. Light reflected from "
            "the two faces of the film interferes, and as gravity thins the film the colours shift "
            "and swirl.",
        ),
    ),
    lab_kicker="Interactive Laboratory",
    lab_heading="Bubble Science Lab",
    lab_blurb=(
        "From mathematical models to physical phenomena: explore bubbles through interactive "
        "simulations. Pick a tab below to begin."
    ),
    tab_mechanics="Film mechanics",
    tab_geometry="Geometry",
    tab_optics="Interference",
    mechanics_title="Experiment 1: Connected bubbles",
    airflow_label="Air flow",
    collapse_notice="A bubble has collapsed. Reset or move a slider to run again.",
    geometry_title="Experiment 2: Soap-film geometry",
    geometry_blurb=(
        "Plateau's problem: find the shortest total length joining these points. "
        "Nature settles into the state of least energy."
    ),
    optics_title="Experiment 3: Interference colours",
    optics_blurb=(
        "A soap film has no pigment. Its colour comes from light reflected off the top and "
        "bottom surfaces interfering; the thickness decides which colours are reinforced and "
        "which cancel."
    ),
    conclusion_heading="Conclusion",
    conclusion_body=(
        "Thanks to generations of physicists, chemists, mathematicians and biologists we now "
        "understand bubbles and surfaces far better. Surfaces remain a lively research topic in "
        "academia and industry alike, from the arrangement of atoms on a surface to the chemical "
        "reactions that happen there and their applications."
    ),
    more_topics=(
        Topic("Sea spray", "Climate effects and condensation nuclei"),
        Topic("Origin of life", "Lipid molecules and protocells"),
        Topic("Bubble recipes", "Glycerol and surface tension"),
    ),
    footer_title="Bubble Science",
    footer_credit=(
        'Based on "The Beauty of Bubbles", Science Development Journal Vol 29 No 11.'
    ),
)

_ARTICLES = {Language.ZH: _ZH, Language.EN: _EN}


def article_text(language: Language | str = Language.ZH) -> ArticleText:
    try:
        return _ARTICLES[Language(language)]
    except ValueError as exc:
        msg = f"Unsupported language: {language}"
        raise ValueError(msg) from exc


__all__ = ["Language", "Topic", "ArticleText", "article_text"]
