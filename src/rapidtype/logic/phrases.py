"""
Phrase data for SENTENCE mode.

Two sources live here: the default phrase bank the generator draws from
(simple greetings for EASY, proverbs for NORMAL and HARD) and the larger
problem catalog, which can be turned into a bank with PhraseBank.from_problems.
Phrases are hiragana only; every character becomes one tile.
"""

from __future__ import annotations

import random
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from rapidtype.logic.enums import Difficulty
from rapidtype.logic.exceptions import InvalidConfigError


class SentenceCategory(str, Enum):
    PROVERB = "proverb"
    IDIOM = "idiom"
    FOOD = "food"
    ANIMAL = "animal"
    NATURE = "nature"
    LIFE = "life"


class Phrase(BaseModel):
    """A tappable phrase and its English gloss."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    english: str = ""


class SentenceProblem(BaseModel):
    """Catalog entry with display form and meanings."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(min_length=1)  # hiragana the player taps
    display: str  # kanji form for display
    meaning: str
    meaning_en: str
    category: SentenceCategory
    difficulty: Difficulty

    def to_phrase(self) -> Phrase:
        return Phrase(text=self.text, english=self.meaning_en)


SIMPLE_PHRASES: tuple[Phrase, ...] = (
    Phrase(text="おはようございます", english="Good morning"),
    Phrase(text="ありがとう", english="Thank you"),
    Phrase(text="こんにちは", english="Hello"),
    Phrase(text="さようなら", english="Goodbye"),
    Phrase(text="おやすみなさい", english="Good night"),
)

PROVERB_PHRASES: tuple[Phrase, ...] = (
    Phrase(text="いしのうえにもさんねん", english="Persistence pays off"),
    Phrase(text="さるもきからおちる", english="Even experts make mistakes"),
    Phrase(text="ちりもつもればやまとなる", english="Many a little makes a mickle"),
    Phrase(text="なくこはそだつ", english="Crying children grow well"),
    Phrase(text="はなよりだんご", english="Substance over style"),
)


class PhraseBank(BaseModel):
    """Phrases available to SENTENCE mode, grouped by difficulty."""

    model_config = ConfigDict(frozen=True)

    phrases: dict[Difficulty, tuple[Phrase, ...]]

    @classmethod
    def default(cls) -> PhraseBank:
        return cls(
            phrases={
                Difficulty.EASY: SIMPLE_PHRASES,
                Difficulty.NORMAL: PROVERB_PHRASES,
                Difficulty.HARD: PROVERB_PHRASES,
            },
        )

    @classmethod
    def from_problems(cls, problems: list[SentenceProblem] | tuple[SentenceProblem, ...]) -> PhraseBank:
        """Build a bank keyed by each problem's own difficulty."""
        grouped: dict[Difficulty, list[Phrase]] = {}
        for problem in problems:
            grouped.setdefault(problem.difficulty, []).append(problem.to_phrase())
        return cls(phrases={difficulty: tuple(items) for difficulty, items in grouped.items()})

    def pick(self, difficulty: Difficulty, rng: random.Random | None = None) -> Phrase:
        """
        Pick one phrase for the difficulty, uniformly at random.

        Raises:
            InvalidConfigError: If the bank has no phrase for the difficulty.

        """
        candidates = self.phrases.get(difficulty, ())
        if not candidates:
            raise InvalidConfigError(f"No phrases for difficulty {difficulty.value}")
        return (rng or random).choice(candidates)


# (id, text, display, meaning, meaning_en, category, difficulty)
_CATALOG_ROWS: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    ("proverb_001", "いしのうえにもさんねん", "石の上にも三年", "辛抱強く続ければ必ず成功する", "Persistence pays off", "proverb", "easy"),
    ("proverb_002", "さるもきからおちる", "猿も木から落ちる", "名人でも失敗することがある", "Even experts make mistakes", "proverb", "easy"),
    ("proverb_003", "ちりもつもればやまとなる", "塵も積もれば山となる", "小さなものも積み重なれば大きくなる", "Many a little makes a mickle", "proverb", "easy"),
    ("proverb_004", "ななころびやおき", "七転び八起き", "何度失敗しても諦めずに立ち上がる", "Fall seven times, stand up eight", "proverb", "easy"),
    ("proverb_005", "いぬもあるけばぼうにあたる", "犬も歩けば棒に当たる", "行動すれば思わぬ幸運に出会う", "Fortune comes to those who seek it", "proverb", "easy"),
    ("proverb_006", "はなよりだんご", "花より団子", "風流より実益を取る", "Practicality over aesthetics", "proverb", "easy"),
    ("proverb_007", "ねこにこばん", "猫に小判", "価値のわからない者に与えても無駄", "Casting pearls before swine", "proverb", "easy"),
    ("proverb_008", "えびでたいをつる", "海老で鯛を釣る", "少ない投資で大きな利益を得る", "A small investment yields big returns", "proverb", "easy"),
    ("proverb_009", "あめふってじかたまる", "雨降って地固まる", "困難の後は状況が良くなる", "After a storm comes a calm", "proverb", "normal"),
    ("proverb_010", "じごうじとく", "自業自得", "自分の行いの結果は自分に返ってくる", "You reap what you sow", "proverb", "normal"),
    ("proverb_011", "いちごいちえ", "一期一会", "一生に一度の出会いを大切にする", "Once in a lifetime encounter", "proverb", "normal"),
    ("proverb_012", "せいてんのへきれき", "青天の霹靂", "突然の衝撃的な出来事", "A bolt from the blue", "proverb", "normal"),
    ("proverb_013", "おにのめにもなみだ", "鬼の目にも涙", "冷酷な人も時には感動する", "Even the hardest heart can be moved", "proverb", "normal"),
    ("proverb_014", "とらのいをかるきつね", "虎の威を借る狐", "他人の権力を利用して威張る", "Borrowing authority from others", "proverb", "normal"),
    ("proverb_015", "ぬかにくぎ", "糠に釘", "手応えがない、効果がない", "Like talking to a wall", "proverb", "normal"),
    ("proverb_016", "がりょうてんせい", "画竜点睛", "仕上げの最も重要な部分", "The finishing touch", "proverb", "hard"),
    ("proverb_017", "しんしょうぼうだい", "針小棒大", "物事を大げさに言うこと", "Making a mountain out of a molehill", "proverb", "hard"),
    ("proverb_018", "ごじゅっぽひゃっぽ", "五十歩百歩", "大差がない、似たり寄ったり", "Six of one, half a dozen of the other", "proverb", "hard"),
    ("idiom_001", "あたまがいい", "頭がいい", "賢い、頭の回転が速い", "Smart, clever", "idiom", "easy"),
    ("idiom_002", "てをぬく", "手を抜く", "手間を省いて楽をする", "Cut corners", "idiom", "easy"),
    ("idiom_003", "きがきく", "気が利く", "細かいところに気がつく", "Attentive, thoughtful", "idiom", "easy"),
    ("idiom_004", "めがまわる", "目が回る", "とても忙しい", "Extremely busy", "idiom", "easy"),
    ("idiom_005", "はらがたつ", "腹が立つ", "怒りを感じる", "To get angry", "idiom", "easy"),
    ("idiom_006", "みみがいたい", "耳が痛い", "批判されて辛い", "Hard to hear criticism", "idiom", "easy"),
    ("idiom_007", "あしをひっぱる", "足を引っ張る", "他人の邪魔をする", "To hold someone back", "idiom", "normal"),
    ("idiom_008", "かたをもつ", "肩を持つ", "味方をする、支持する", "To take sides with", "idiom", "normal"),
    ("idiom_009", "くちがかるい", "口が軽い", "秘密を守れない", "Unable to keep secrets", "idiom", "normal"),
    ("idiom_010", "こしがひくい", "腰が低い", "謙虚で丁寧な態度", "Humble and polite", "idiom", "normal"),
    ("food_001", "おにぎり", "おにぎり", "米を握った日本の代表的な食べ物", "Rice ball", "food", "easy"),
    ("food_002", "らーめん", "ラーメン", "中華風の麺料理", "Ramen noodles", "food", "easy"),
    ("food_003", "すし", "寿司", "酢飯と魚介類の料理", "Sushi", "food", "easy"),
    ("food_004", "てんぷら", "天ぷら", "衣をつけて揚げた料理", "Tempura", "food", "easy"),
    ("food_005", "みそしる", "味噌汁", "味噌を使った日本の伝統的なスープ", "Miso soup", "food", "easy"),
    ("food_006", "たこやき", "たこ焼き", "タコが入った丸い焼き物", "Takoyaki (octopus balls)", "food", "easy"),
    ("animal_001", "いぬ", "犬", "人間の最良の友", "Dog", "animal", "easy"),
    ("animal_002", "ねこ", "猫", "人気のペット動物", "Cat", "animal", "easy"),
    ("animal_003", "うさぎ", "兎", "長い耳を持つ可愛い動物", "Rabbit", "animal", "easy"),
    ("animal_004", "ぱんだ", "パンダ", "白と黒の模様を持つ熊", "Panda", "animal", "easy"),
    ("animal_005", "きりん", "キリン", "首が長い動物", "Giraffe", "animal", "easy"),
    ("nature_001", "さくら", "桜", "日本を代表する春の花", "Cherry blossom", "nature", "easy"),
    ("nature_002", "ふじさん", "富士山", "日本一高い山", "Mount Fuji", "nature", "easy"),
    ("nature_003", "たいよう", "太陽", "地球に光と熱を与える恒星", "Sun", "nature", "easy"),
    ("nature_004", "にじ", "虹", "雨上がりに空に現れる七色の光", "Rainbow", "nature", "easy"),
    ("nature_005", "うみ", "海", "塩水をたたえた広大な水域", "Ocean, sea", "nature", "easy"),
    ("life_001", "おはよう", "おはよう", "朝の挨拶", "Good morning", "life", "easy"),
    ("life_002", "ありがとう", "ありがとう", "感謝の気持ちを表す言葉", "Thank you", "life", "easy"),
    ("life_003", "おやすみ", "おやすみ", "寝る前の挨拶", "Good night", "life", "easy"),
    ("life_004", "いただきます", "いただきます", "食事前の挨拶", "Said before eating", "life", "easy"),
    ("life_005", "ごちそうさま", "ごちそうさま", "食事後の感謝の言葉", "Said after eating", "life", "easy"),
    ("life_006", "がんばって", "頑張って", "励ましの言葉", "Do your best, good luck", "life", "easy"),
    ("life_007", "おつかれさま", "お疲れ様", "労をねぎらう言葉", "Thank you for your hard work", "life", "normal"),
    ("life_008", "よろしくおねがいします", "よろしくお願いします", "依頼や挨拶の言葉", "Nice to meet you / Please", "life", "normal"),
    ("life_009", "おじゃまします", "お邪魔します", "他人の家に入る時の挨拶", "Excuse me for intruding", "life", "normal"),
    ("life_010", "おめでとう", "おめでとう", "お祝いの言葉", "Congratulations", "life", "easy"),
)

SENTENCE_PROBLEMS: tuple[SentenceProblem, ...] = tuple(
    SentenceProblem(
        id=row[0],
        text=row[1],
        display=row[2],
        meaning=row[3],
        meaning_en=row[4],
        category=SentenceCategory(row[5]),
        difficulty=Difficulty(row[6].upper()),
    )
    for row in _CATALOG_ROWS
)


def get_problems_by_difficulty(difficulty: Difficulty) -> list[SentenceProblem]:
    return [p for p in SENTENCE_PROBLEMS if p.difficulty == difficulty]


def get_problems_by_category(category: SentenceCategory) -> list[SentenceProblem]:
    return [p for p in SENTENCE_PROBLEMS if p.category == category]


def get_random_problem(difficulty: Difficulty, rng: random.Random | None = None) -> SentenceProblem:
    """Return a random catalog problem of the given difficulty."""
    problems = get_problems_by_difficulty(difficulty)
    if not problems:
        raise InvalidConfigError(f"No catalog problems for difficulty {difficulty.value}")
    return (rng or random).choice(problems)


def get_random_problems(
    count: int,
    difficulty: Difficulty | None = None,
    rng: random.Random | None = None,
) -> list[SentenceProblem]:
    """Return up to count distinct problems, optionally limited to one difficulty."""
    pool = get_problems_by_difficulty(difficulty) if difficulty is not None else list(SENTENCE_PROBLEMS)
    return (rng or random).sample(pool, min(max(count, 0), len(pool)))
