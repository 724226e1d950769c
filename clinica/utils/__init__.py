from .util import permission_required, current_identity, parse_date, parse_time, parse_amount, require_text
