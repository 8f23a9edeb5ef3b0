import base64
from typing import Dict, Optional

from hypothesis import strategies as st
from hypothesis.strategies import composite

# Storage account names: 3-24 lowercase letters and digits
account_name_strategy = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=3, max_size=24
)

# Container names: lowercase letters and digits, hyphens in between
container_name_strategy = st.from_regex(r"[a-z0-9]{3,20}(-[a-z0-9]{1,10})?", fullmatch=True)

# Account keys are base64, so padding '=' is common
account_key_strategy = st.binary(min_size=16, max_size=64).map(
    lambda raw: base64.b64encode(raw).decode("ascii")
)

# Signature values as they appear in a query string (already URL-encoded)
signature_strategy = st.text(
    alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789%",
    min_size=8,
    max_size=64,
)


@composite
def sas_query_strategy(draw) -> str:
    """Generate a raw SAS query string without the leading '?'."""
    permissions = draw(st.sampled_from(["r", "rl", "racwdl"]))
    signature = draw(signature_strategy)
    return f"sv=2021-08-06&ss=b&srt=sco&sp={permissions}&sig={signature}"


@composite
def sas_url_strategy(draw) -> Dict[str, Optional[str]]:
    """Generate a SAS URL together with the components it was built from."""
    account_name = draw(account_name_strategy)
    container_name = draw(st.one_of(st.none(), container_name_strategy))
    query = draw(sas_query_strategy())

    path = f"/{container_name}" if container_name else "/"
    return {
        "url": f"https://{account_name}.blob.core.windows.net{path}?{query}",
        "account_name": account_name,
        "container_name": container_name,
        "query": f"?{query}",
    }
