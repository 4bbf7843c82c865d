# Bible versions, languages and the verse pool used for random selection.
#
# Each version maps to the translation id understood by bible-api.com.
# Versions the API does not carry (ESV, NIV, NLT) fall back to the
# World English Bible.

BIBLE_VERSIONS = {
    # English
    "ESV": {"name": "English Standard Version", "language": "en", "translation": "web"},
    "NIV": {"name": "New International Version", "language": "en", "translation": "web"},
    "KJV": {"name": "King James Version", "language": "en", "translation": "kjv"},
    "NLT": {"name": "New Living Translation", "language": "en", "translation": "web"},
    # Spanish
    "RVR": {"name": "Reina Valera 1909", "language": "es", "translation": "rvr1960"},
    # German
    "DELUT": {"name": "Luther Bible 1912", "language": "de", "translation": "lutherbibel1912"},
    # French
    "LSG": {"name": "Louis Segond 1910", "language": "fr", "translation": "ls1910"},
    # Dutch
    "DUTSVV": {"name": "Dutch Staten Vertaling", "language": "nl", "translation": "statenvertaling"},
    # Chinese (Mandarin)
    "CUVS": {"name": "Chinese Union Simplified", "language": "zh", "translation": "cuv"},
}

DEFAULT_TRANSLATION = "web"

LANGUAGES = {
    "en": {"name": "English", "versions": ["ESV", "NIV", "KJV", "NLT"]},
    "es": {"name": "Spanish", "versions": ["RVR"]},
    "de": {"name": "German", "versions": ["DELUT"]},
    "fr": {"name": "French", "versions": ["LSG"]},
    "nl": {"name": "Dutch", "versions": ["DUTSVV"]},
    "zh": {"name": "Mandarin", "versions": ["CUVS"]},
}

# Popular references that exist in every supported translation.
# Format: BOOK.CHAPTER.VERSES (verses may be a range like 5-6)
VERSE_POOL = [
    "JHN.3.16", "PSA.23.1-6", "ROM.8.28", "PHP.4.13", "ISA.40.31",
    "JER.29.11", "PRO.3.5-6", "ROM.12.2", "GAL.5.22-23", "HEB.11.1",
    "JOS.1.9", "PSA.46.10", "MAT.11.28-30", "ROM.5.8", "2CO.5.17",
    "EPH.2.8-9", "PHP.4.6-7", "PSA.119.105", "1CO.13.4-7", "ROM.8.38-39",
    "ISA.41.10", "MAT.6.33", "PSA.37.4", "PRO.22.6", "COL.3.23",
    "HEB.12.1-2", "1PE.5.7", "MAT.28.19-20", "DEU.31.6", "PSA.91.1-2",
    "JHN.14.6", "JHN.1.1", "GEN.1.1", "ROM.3.23", "EPH.6.10-11",
    "PSA.27.1", "ISA.53.5", "MAT.5.16", "JAM.1.2-4", "2TI.1.7",
    "PSA.121.1-2", "ROM.12.12", "HEB.4.16", "PSA.34.8", "1JN.4.19",
    "LAM.3.22-23", "MIC.6.8", "PRO.16.3", "PSA.139.14", "NAH.1.7",
]

# Book codes (USFM style) to the book names bible-api.com expects.
BOOK_NAMES = {
    "GEN": "genesis", "EXO": "exodus", "LEV": "leviticus", "NUM": "numbers",
    "DEU": "deuteronomy", "JOS": "joshua", "JDG": "judges", "RUT": "ruth",
    "1SA": "1samuel", "2SA": "2samuel", "1KI": "1kings", "2KI": "2kings",
    "1CH": "1chronicles", "2CH": "2chronicles", "EZR": "ezra", "NEH": "nehemiah",
    "EST": "esther", "JOB": "job", "PSA": "psalms", "PRO": "proverbs",
    "ECC": "ecclesiastes", "SNG": "songofsolomon", "ISA": "isaiah", "JER": "jeremiah",
    "LAM": "lamentations", "EZK": "ezekiel", "DAN": "daniel", "HOS": "hosea",
    "JOL": "joel", "AMO": "amos", "OBA": "obadiah", "JON": "jonah",
    "MIC": "micah", "NAH": "nahum", "HAB": "habakkuk", "ZEP": "zephaniah",
    "HAG": "haggai", "ZEC": "zechariah", "MAL": "malachi",
    "MAT": "matthew", "MRK": "mark", "LUK": "luke", "JHN": "john",
    "ACT": "acts", "ROM": "romans", "1CO": "1corinthians", "2CO": "2corinthians",
    "GAL": "galatians", "EPH": "ephesians", "PHP": "philippians", "COL": "colossians",
    "1TH": "1thessalonians", "2TH": "2thessalonians", "1TI": "1timothy", "2TI": "2timothy",
    "TIT": "titus", "PHM": "philemon", "HEB": "hebrews", "JAM": "james",
    "1PE": "1peter", "2PE": "2peter", "1JN": "1john", "2JN": "2john",
    "3JN": "3john", "JUD": "jude", "REV": "revelation",
}
