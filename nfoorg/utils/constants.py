"""
Constantes globales pour NfoOrg.

Ce module contient les constantes utilisees dans l'application:
- Mots-cles de classification (genres et pays)
- Fichiers marqueurs des repertoires de projets logiciels
- Extensions des fichiers media
- Traduction des genres anglais vers le chinois simplifie
"""

# Genres documentaire (sous-chaine, insensible a la casse)
DOCUMENTARY_KEYWORDS = ("纪录片", "documentary")

# Genres emission de variete / tele-realite / talk-show / jeux / concours
VARIETY_KEYWORDS = (
    "综艺节目",
    "variety",
    "真人秀",
    "reality",
    "真人节目",
    "reality show",
    "脱口秀",
    "talk show",
    "游戏节目",
    "game-show",
    "竞赛节目",
    "competition",
    "选秀节目",
    "talent show",
)

# Genres animation
ANIME_KEYWORDS = ("动漫", "动画", "animation")

# Pays Japon / Coree
JPKR_COUNTRY_KEYWORDS = (
    "日本",
    "日本国",
    "japan",
    "韩国",
    "大韩民国",
    "korea",
    "south korea",
)

# Pays Chine continentale / Hong Kong / Taiwan
CN_COUNTRY_KEYWORDS = (
    "中国大陆",
    "中国香港",
    "香港特别行政区",
    "中国台湾",
    "台湾地区",
    "香港",
    "台湾",
    "中国",
    "中华人民共和国",
    "china",
    "hong kong",
    "taiwan",
)

# Fichiers signalant un repertoire de projet logiciel (jamais deplace)
PROJECT_MARKER_FILES = (
    "go.mod",
    "main.go",
    "go.sum",
    "CMakeLists.txt",
    "Makefile",
    "package.json",
    "requirements.txt",
    "README.md",
    "README.txt",
    ".git",
)

# Marqueurs utilises pendant la recherche de NFO (sous-ensemble build/manifest)
DISCOVERY_PROJECT_MARKERS = (
    "go.mod",
    "main.go",
    "go.sum",
    "CMakeLists.txt",
    "Makefile",
    "package.json",
    "requirements.txt",
)

# Extensions des fichiers media
MEDIA_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".wmv",
    ".flv",
    ".mov",
    ".rmvb",
})

NFO_EXTENSION = ".nfo"

# Sous-repertoires des repertoires temporaires par mode de scraping
SCRAPE_SUBDIRS = {
    "movies": ("Movie",),
    "tv": ("TvShow",),
    "all": ("Movie", "TvShow"),
}

# Traduction des genres anglais (TMDB/IMDb) vers le chinois simplifie
GENRE_TRANSLATIONS = {
    "Action": "动作",
    "Adventure": "冒险",
    "Animation": "动画",
    "Comedy": "喜剧",
    "Crime": "犯罪",
    "Documentary": "纪录片",
    "Drama": "剧情",
    "Family": "家庭",
    "Fantasy": "奇幻",
    "Horror": "恐怖",
    "Mystery": "悬疑",
    "Romance": "爱情",
    "Science Fiction": "科幻",
    "Thriller": "惊悚",
    "War": "战争",
    "Western": "西部",
    "Biography": "传记",
    "History": "历史",
    "Music": "音乐",
    "Musical": "歌舞",
    "Sport": "体育",
    "Talk Show": "脱口秀",
    "Variety Show": "综艺节目",
    "News": "新闻",
    "Reality TV": "真人秀",
    "Game-Show": "游戏节目",
    "Game Show": "游戏节目",
    "Variety": "综艺节目",
    "Film-Noir": "黑色电影",
    "Short": "短片",
    "TV Movie": "电视电影",
    "Competition": "竞赛节目",
    "Talent Show": "选秀节目",
}
