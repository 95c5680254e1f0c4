from yandex_ocr.services.ocr.yandex import YandexOcrClient


class AppState:
    ocr_client: YandexOcrClient | None = None


global_state = AppState()
