# infinitune/services/identity.py
"""
Song identity text (title, artist, album, genre, review) backed by Faker.

The assembler treats an identity provider as a black box it reseeds right
before use, so every provider here must draw only from its own Faker
instance. identity_for_locale() hands out a fresh instance per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol, Type

from faker import Faker
from faker.providers import BaseProvider

from infinitune.core.errors import UnknownLocaleError


class IdentityProvider(Protocol):
    def reseed(self, value: int) -> None: ...

    def song_title(self) -> str: ...

    def artist_name(self) -> str: ...

    def genre(self) -> str: ...

    def album_name(self) -> str: ...

    def review(self) -> str: ...


# =============================================================================
# FAKER PROVIDERS
# =============================================================================

class MusicProvider(BaseProvider):
    """English music text. Subclasses swap the word tables per locale."""

    album_probability = 70
    single_label = "Single"

    adjectives = (
        "Electric", "Golden", "Silent", "Broken", "Midnight", "Crimson", "Endless", "Neon",
        "Velvet", "Hollow", "Wild", "Frozen", "Burning", "Lonely", "Distant", "Sweet",
        "Paper", "Glass", "Cosmic", "Restless",
    )
    nouns = (
        "Heart", "River", "Sky", "Dream", "Road", "Fire", "Ocean", "Shadow", "Light", "City",
        "Rain", "Mirror", "Garden", "Thunder", "Echo", "Summer", "Highway", "Moon", "Signal",
        "Horizon",
    )
    title_formats = (
        "{adj} {noun}",
        "The {noun}",
        "{noun} of {noun2}",
        "{adj} {noun}s",
        "Into the {noun}",
        "{noun} {noun2}",
        "Last {noun}",
    )
    band_formats = (
        "The {adj} {noun}s",
        "{adj} {noun}",
        "{noun} {noun2}",
        "{last_name} & the {noun}s",
    )
    album_formats = (
        "{adj} {noun}",
        "Songs from the {noun}",
        "{noun} Sessions",
        "The {adj} Tapes",
        "{noun} {noun2}",
    )
    genres = (
        "Rock", "Pop", "Jazz", "Electronic", "Hip Hop", "Blues", "Country", "Folk",
        "Reggae", "Soul", "Funk", "Metal", "Classical", "Latin", "Stage And Screen",
        "Non Music", "World", "Rap",
    )
    review_formats = (
        "A {quality} record that {verb} from the first bar.",
        "{quality_cap} and {quality2}, this one {verb} on every listen.",
        "Not every track lands, but the {noun} moments are {quality}.",
        "{quality_cap} songwriting that {verb} long after the last chorus.",
    )
    qualities = (
        "bold", "haunting", "uneven", "playful", "lush", "restrained", "raw", "dazzling",
        "tender", "relentless",
    )
    verbs = ("grabs you", "lingers", "soars", "hits hard", "slowly unfolds", "stays with you")

    def _words(self) -> Dict[str, str]:
        return {
            "adj": self.random_element(self.adjectives),
            "noun": self.random_element(self.nouns),
            "noun2": self.random_element(self.nouns),
            "last_name": self.generator.last_name(),
        }

    def song_name(self) -> str:
        return self.random_element(self.title_formats).format(**self._words())

    def music_artist(self) -> str:
        if self.generator.boolean(chance_of_getting_true=50):
            return self.generator.name()
        return self.random_element(self.band_formats).format(**self._words())

    def music_album(self) -> str:
        if self.generator.boolean(chance_of_getting_true=self.album_probability):
            return self.random_element(self.album_formats).format(**self._words())
        return self.single_label

    def music_genre(self) -> str:
        return self.random_element(self.genres)

    def music_review(self) -> str:
        quality = self.random_element(self.qualities)
        return self.random_element(self.review_formats).format(
            quality=quality,
            quality_cap=quality.capitalize(),
            quality2=self.random_element(self.qualities),
            verb=self.random_element(self.verbs),
            noun=self.random_element(self.nouns).lower(),
        )


class RuMusicProvider(MusicProvider):
    single_label = "Сингл"

    adjectives = (
        "Белый", "Последний", "Тихий", "Золотой", "Ночной", "Летний", "Дальний", "Старый",
        "Северный", "Вечный",
    )
    nouns = (
        "Город", "Ветер", "Берег", "Свет", "Дождь", "Путь", "Сон", "Огонь", "Вокзал", "Рассвет",
    )
    title_formats = (
        "{adj} {noun}",
        "{noun}",
        "Мой {noun}",
        "{noun} и {noun2}",
        "Там, где {noun}",
    )
    band_formats = (
        "{adj} {noun}",
        "{noun} {noun2}",
        "Группа «{noun}»",
    )
    album_formats = (
        "{adj} {noun}",
        "{noun}",
        "Песни про {noun}",
    )
    genres = (
        "Рок", "Поп", "Джаз", "Электроника", "Хип-хоп", "Шансон", "Инди", "Фолк",
        "Панк", "Бард",
    )
    review_formats = (
        "{quality_cap} альбом, который {verb}.",
        "{quality_cap} и {quality2} звучание: {noun} слышен в каждой песне.",
        "Не всё получилось, но {quality} моменты {verb}.",
    )
    qualities = ("смелый", "тёплый", "мрачный", "лёгкий", "честный", "неровный")
    verbs = ("цепляет", "не отпускает", "запоминается", "звучит свежо")


# =============================================================================
# IDENTITY ADAPTER
# =============================================================================

class FakerIdentity:
    """IdentityProvider over one private Faker instance."""

    def __init__(self, faker_locale: str, provider: Type[MusicProvider] = MusicProvider):
        self.faker_locale = faker_locale
        self.fake = Faker(faker_locale)
        self.fake.add_provider(provider)

    def reseed(self, value: int) -> None:
        self.fake.seed_instance(int(value))

    def song_title(self) -> str:
        return self.fake.song_name()

    def artist_name(self) -> str:
        return self.fake.music_artist()

    def genre(self) -> str:
        return self.fake.music_genre()

    def album_name(self) -> str:
        return self.fake.music_album()

    def review(self) -> str:
        return self.fake.music_review()


@dataclass(frozen=True)
class LocaleSpec:
    faker_locale: str
    provider: Type[MusicProvider]
    label: str

    def build(self) -> FakerIdentity:
        return FakerIdentity(self.faker_locale, self.provider)


LOCALES: Dict[str, LocaleSpec] = {
    "en_US": LocaleSpec("en_US", MusicProvider, "English (US)"),
    "ru": LocaleSpec("ru_RU", RuMusicProvider, "Русский"),
}


def available_locales() -> List[str]:
    return list(LOCALES)


def identity_for_locale(locale: str) -> FakerIdentity:
    spec = LOCALES.get(locale)
    if spec is None:
        raise UnknownLocaleError(locale)
    return spec.build()
