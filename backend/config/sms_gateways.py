# SMS-to-email gateway domains by carrier key.
# A message emailed to <10-digit number>@<domain> is relayed to the phone as a text.

SMS_GATEWAYS = {
    "att": {"name": "AT&T", "domain": "txt.att.net"},
    "verizon": {"name": "Verizon", "domain": "vtext.com"},
    "tmobile": {"name": "T-Mobile", "domain": "tmomail.net"},
    "sprint": {"name": "Sprint", "domain": "messaging.sprintpcs.com"},
    "uscellular": {"name": "US Cellular", "domain": "email.uscc.net"},
    "cricket": {"name": "Cricket", "domain": "sms.cricketwireless.net"},
    "boost": {"name": "Boost Mobile", "domain": "sms.myboostmobile.com"},
    "metro": {"name": "Metro PCS", "domain": "mymetropcs.com"},
    "googlefi": {"name": "Google Fi", "domain": "msg.fi.google.com"},
    "visible": {"name": "Visible", "domain": "vtext.com"},
    "xfinity": {"name": "Xfinity Mobile", "domain": "vtext.com"},
    "mint": {"name": "Mint Mobile", "domain": "tmomail.net"},
}

# US numbers only
PHONE_DIGITS = 10

# Conventional single-segment SMS length
SMS_MAX_LENGTH = 160
