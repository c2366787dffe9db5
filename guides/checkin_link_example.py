"""Check-in link example using eventpass.

Run with EVENTPASS_SECRET set:

    EVENTPASS_SECRET=change-me-to-a-long-random-value python guides/checkin_link_example.py
"""

from urllib.parse import parse_qs, urlsplit

from eventpass import extract_credential, get_credential_service
from eventpass.security import credential_link


def main():
    """Issue a check-in link for a participant, then handle the follow-up request."""
    # Fails here, at startup, when the secret is missing
    service = get_credential_service()

    token = service.issue({"participantId": "p1", "eventId": "e1", "type": "checkin"})
    link = credential_link("https://example.org/checkin", token)
    print("Send this link to the participant:", link)

    # Later, the request for the link comes back in
    query = {k: v[0] for k, v in parse_qs(urlsplit(link).query).items()}
    presented = extract_credential(headers={}, query=query)
    claims = service.verify(presented) if presented else None
    if claims is None:
        print("Not authorized")
        return

    print(f"Checking in participant {claims['participantId']} for event {claims['eventId']}")


if __name__ == "__main__":
    main()
