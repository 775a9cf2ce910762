from blockpreview.models.models import Domain, Page, PageCulture

__all__ = ["Domain", "Page", "PageCulture"]
