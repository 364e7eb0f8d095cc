import io

import qrcode
import qrcode.constants


def make_qr(data:str, quiet_zone:bool = True):
	qr = qrcode.QRCode(
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		border=4 if quiet_zone is True else 0,
	)
	qr.add_data(data)
	qr.make(fit=True)
	return qr


def render_qr(data:str, quiet_zone:bool = True, invert:bool = False) -> str:
	"""
	Renders data as a QR code drawn with block characters, ready to print to a terminal.
	Raises qrcode.exceptions.DataOverflowError when the data doesn't fit in any QR version.
	"""
	out = io.StringIO()
	make_qr(data, quiet_zone).print_ascii(out=out, invert=invert)
	return out.getvalue()
