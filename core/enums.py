from enum import Enum


class MediaLot(str, Enum):
    ANIME = "anime"
    AUDIO_BOOK = "audio_book"
    BOOK = "book"
    MANGA = "manga"
    MOVIE = "movie"
    MUSIC = "music"
    PODCAST = "podcast"
    SHOW = "show"
    VIDEO_GAME = "video_game"
    VISUAL_NOVEL = "visual_novel"
    COMIC_BOOK = "comic_book"


class MediaSource(str, Enum):
    ANILIST = "anilist"
    AUDIBLE = "audible"
    CUSTOM = "custom"
    GIANT_BOMB = "giant_bomb"
    GOOGLE_BOOKS = "google_books"
    HARDCOVER = "hardcover"
    IGDB = "igdb"
    ITUNES = "itunes"
    LISTENNOTES = "listennotes"
    MANGA_UPDATES = "manga_updates"
    MYANIMELIST = "myanimelist"
    OPENLIBRARY = "openlibrary"
    SPOTIFY = "spotify"
    TMDB = "tmdb"
    TVDB = "tvdb"
    VNDB = "vndb"
    YOUTUBE_MUSIC = "youtube_music"


class EntityLot(str, Enum):
    METADATA = "metadata"
    PERSON = "person"
    METADATA_GROUP = "metadata_group"
    EXERCISE = "exercise"
    COLLECTION = "collection"
    WORKOUT = "workout"
    WORKOUT_TEMPLATE = "workout_template"
    REVIEW = "review"
    USER_MEASUREMENT = "user_measurement"


class SeenState(str, Enum):
    COMPLETED = "completed"
    DROPPED = "dropped"
    IN_PROGRESS = "in_progress"
    ON_A_HOLD = "on_a_hold"


class ImportSource(str, Enum):
    ANILIST = "anilist"
    AUDIOBOOKSHELF = "audiobookshelf"
    GENERIC_JSON = "generic_json"
    GOODREADS = "goodreads"
    IMDB = "imdb"
    JELLYFIN = "jellyfin"
    MEDIATRACKER = "mediatracker"
    MOVARY = "movary"
    MYANIMELIST = "myanimelist"
    NETFLIX = "netflix"
    OPEN_SCALE = "open_scale"
    PLEX = "plex"
    STORYGRAPH = "storygraph"
    STRONG_APP = "strong_app"
    TRAKT = "trakt"
