# app/listing.py
"""
Search, filter and pagination for the member table.

Everything here is a pure function of (members, query, page); the dashboard
builds a :class:`MemberListView` from a freshly fetched member list on each
request.
"""

from operator import attrgetter

PAGE_SIZE = 10
PAGE_WINDOW = 10

SEARCH_FIELDS = ('first_name', 'last_name', 'nickname', 'role', 'furigana')


def matches(member, query):
    """True if ``query`` is a case-insensitive substring of any search field."""
    if not query:
        return True
    needle = query.lower()
    for field in SEARCH_FIELDS:
        value = getattr(member, field, None) or ''
        if needle in value.lower():
            return True
    return False


def filter_members(members, query):
    return [m for m in members if matches(m, query)]


def total_pages(count, per_page=PAGE_SIZE):
    """ceil(count / per_page)"""
    return -(-count // per_page)


def clamp_page(page, pages):
    """Clamp ``page`` to [1, pages]; page 1 when there are no pages."""
    return max(1, min(page, pages)) if pages else 1


def page_slice(items, page, per_page=PAGE_SIZE):
    start = (page - 1) * per_page
    return items[start:start + per_page]


def page_window(current, pages, size=PAGE_WINDOW):
    """
    Page numbers to show as buttons.

    All pages when there are at most ``size`` of them, otherwise ``size``
    consecutive pages centred on ``current`` and kept inside [1, pages].
    """
    if pages <= size:
        return list(range(1, pages + 1))
    start = max(1, min(current - size // 2, pages - size + 1))
    return list(range(start, start + size))


class MemberListView:
    """Query/page state over a point-in-time member list."""

    def __init__(self, members, query='', page=1, per_page=PAGE_SIZE):
        self.per_page = per_page
        self.query = query or ''
        self.members = sorted(members, key=attrgetter('id'))
        self.page = clamp_page(page, self.total_pages)

    @property
    def filtered(self):
        return filter_members(self.members, self.query)

    @property
    def total(self):
        return len(self.members)

    @property
    def filtered_count(self):
        return len(self.filtered)

    @property
    def total_pages(self):
        return total_pages(self.filtered_count, self.per_page)

    @property
    def items(self):
        return page_slice(self.filtered, self.page, self.per_page)

    @property
    def window(self):
        return page_window(self.page, self.total_pages)

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages

    @property
    def first_index(self):
        """1-based position of the first visible row (0 when empty)."""
        if not self.filtered_count:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self):
        return min(self.page * self.per_page, self.filtered_count)

    def set_query(self, query):
        self.query = query or ''
        self.page = 1

    def go_to(self, page):
        self.page = clamp_page(page, self.total_pages)

    def refresh(self, members):
        """Replace the list with a newly fetched one, keeping query and page."""
        self.members = sorted(members, key=attrgetter('id'))
        self.page = clamp_page(self.page, self.total_pages)
