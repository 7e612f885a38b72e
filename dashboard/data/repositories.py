from datetime import date

from dashboard.data import api_client


class StoreError(RuntimeError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(StoreError):
    pass


def _day_iso(day):
    if isinstance(day, date):
        return day.isoformat()
    return str(day)


class RecordStore:
    """User-scoped record operations backed by the Ghost Mode API.

    Every method takes the user id explicitly; nothing here reads ambient
    session state. Transport and HTTP failures surface as ``StoreError``,
    404 responses as ``NotFoundError``.
    """

    def __init__(self, request=None):
        self._request = request or api_client.request

    def _call(self, method, path, user_id, params=None, json=None):
        try:
            return self._request(method, path, user_id=user_id, params=params, json=json)
        except api_client.ApiError as exc:
            if exc.status_code == 404:
                raise NotFoundError(str(exc), status_code=404) from exc
            raise StoreError(str(exc), status_code=exc.status_code) from exc
        except RuntimeError as exc:
            raise StoreError(str(exc)) from exc

    def list_tasks(self, user_id, day):
        payload = self._call("GET", f"/v1/tasks/day/{_day_iso(day)}", user_id)
        return list((payload or {}).get("items") or [])

    def insert_tasks(self, user_id, day, titles):
        payload = self._call("POST", f"/v1/tasks/day/{_day_iso(day)}", user_id, json={"titles": list(titles)})
        return list((payload or {}).get("items") or [])

    def update_task(self, user_id, task_id, patch):
        return self._call("PATCH", f"/v1/tasks/{task_id}", user_id, json=dict(patch))

    def earliest_task_date(self, user_id):
        payload = self._call("GET", "/v1/tasks/earliest", user_id)
        return (payload or {}).get("date")

    def list_task_completions(self, user_id):
        payload = self._call("GET", "/v1/tasks/completions", user_id)
        return list((payload or {}).get("items") or [])

    def count_tasks(self, user_id, completed=None):
        params = {"completed": "true" if completed else "false"} if completed is not None else None
        payload = self._call("GET", "/v1/tasks/count", user_id, params=params)
        return int((payload or {}).get("count") or 0)

    def list_books(self, user_id):
        payload = self._call("GET", "/v1/books", user_id)
        return list((payload or {}).get("items") or [])

    def create_book(self, user_id, title, author=""):
        return self._call("POST", "/v1/books", user_id, json={"title": title, "author": author})

    def update_book(self, user_id, book_id, patch):
        return self._call("PATCH", f"/v1/books/{book_id}", user_id, json=dict(patch))

    def delete_book(self, user_id, book_id):
        self._call("DELETE", f"/v1/books/{book_id}", user_id)

    def count_books(self, user_id, status=None):
        params = {"status": status} if status else None
        payload = self._call("GET", "/v1/books/count", user_id, params=params)
        return int((payload or {}).get("count") or 0)

    def get_journal_entry(self, user_id, day):
        try:
            return self._call("GET", f"/v1/journal/{_day_iso(day)}", user_id)
        except NotFoundError:
            return None

    def insert_journal_entry(self, user_id, payload):
        return self._call("POST", "/v1/journal", user_id, json=dict(payload))

    def update_journal_entry(self, user_id, entry_id, payload):
        return self._call("PATCH", f"/v1/journal/{entry_id}", user_id, json=dict(payload))

    def list_exam_units(self, user_id):
        payload = self._call("GET", "/v1/exams/units", user_id)
        return list((payload or {}).get("items") or [])

    def upsert_exam_unit(self, user_id, subject, unit_number, status):
        return self._call(
            "PUT",
            "/v1/exams/units",
            user_id,
            json={"subject": subject, "unit_number": int(unit_number), "status": status},
        )
