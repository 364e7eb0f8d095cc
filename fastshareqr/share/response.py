
class ShareResponse:
    """
    A fully built response: status code, header list and the whole body.
    Only 200, 404 and 500 are ever produced.
    """
    def __init__(self, status_code:int, body:bytes = b'', headers = None):
        self.status_code = status_code
        self.body = body
        self.headers = headers if headers is not None else []

    @staticmethod
    def ok(body:bytes, headers = None):
        return ShareResponse(200, body, headers)

    @staticmethod
    def not_found():
        return ShareResponse(404)

    @staticmethod
    def server_error():
        return ShareResponse(500)

    def get_header(self, name:str):
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    def __repr__(self):
        return 'ShareResponse(%s, %s bytes)' % (self.status_code, len(self.body))
