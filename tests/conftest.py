"""Shared fixtures: sample IRCTC booking confirmation emails."""

import pytest


IRCTC_TICKET_EMAIL = """\
Booking Confirmation on IRCTC, Train: 12733, 10-Feb-2026, SL, NLR - LPI

PNR No. : 4938302790
Train No. / Name : 12733 / NARAYANADRI SF
Quota : GENERAL
Class : SLEEPER CLASS
From : NELLORE (NLR)
To : LINGAMPALLI (LPI)
Date of Journey : 10-Feb-2026
Date & Time of Booking : 03-Jan-2026 09:17:40 PM HRS
Adult : 1 Child : 0

Passenger Details:
Sl. No. Name Age Gender Catering Service Option Booking Status Current Status
1 P NARENDER RAJU 53 Male N/A CNF S6 10

Total Fare Rs. 768.60 *#
"""


IRCTC_TICKET_HTML = """\
<html>
<head><style>td { font-family: Arial; }</style></head>
<body>
<table>
<tr><td>PNR No. :</td><td>4938302790</td></tr>
<tr><td>Train No. / Name :</td><td>12733 / NARAYANADRI SF</td></tr>
<tr><td>Quota :</td><td>GENERAL</td></tr>
<tr><td>Class :</td><td>SLEEPER CLASS</td></tr>
<tr><td>From :</td><td>NELLORE (NLR)</td></tr>
<tr><td>To :</td><td>LINGAMPALLI (LPI)</td></tr>
<tr><td>Date of Journey :</td><td>10-Feb-2026</td></tr>
</table>
<table>
<tr><td>1</td><td>P NARENDER RAJU</td><td>53</td><td>Male</td><td>N/A</td>
<td>CNF</td><td>S6</td><td>10</td></tr>
</table>
<p>Total Fare&nbsp;Rs. 768.60 *#</p>
<script>trackOpen();</script>
</body>
</html>
"""


@pytest.fixture
def ticket_email() -> str:
    return IRCTC_TICKET_EMAIL


@pytest.fixture
def waitlisted_email() -> str:
    return IRCTC_TICKET_EMAIL.replace("N/A CNF S6 10", "N/A RLWL S6 10")


@pytest.fixture
def cancelled_email() -> str:
    return IRCTC_TICKET_EMAIL + "\nDear customer, your ticket has been cancelled.\n"


@pytest.fixture
def no_manifest_email() -> str:
    return """\
PNR No. : 4938302790
Train No. / Name : 12733 / NARAYANADRI SF
From : NELLORE (NLR)
To : LINGAMPALLI (LPI)
Date of Journey : 10-Feb-2026
Adult : 2 Child : 0
Total Fare Rs. 1,537.20
"""


@pytest.fixture
def ticket_html() -> str:
    return IRCTC_TICKET_HTML
