import pytest

RESET_MS = 1700000000000

CHECKIN_DUMP = "\n".join([
    "9,0,i,vers,36,214,TP1A,TP1A",
    '9,hsp,0,1000,"*alarm*:android.intent.action.TIME_TICK"',
    '9,hsp,1,10123,"com.example.app"',
    '9,hsp,2,0,"MyTag"',
    f"9,h,0:RESET:TIME:{RESET_MS}",
    "9,h,0,Bl=100,Bs=d,Bh=g,Bp=n,Bt=250,Bv=4200,Pst=out,Pss=3,Sb=2",
    "9,h,100,+r,+w=0,+S",
    "9,h,0,Ewl=1",
    "9,h,250,-w",
    "9,h,50,+Ejb=1,Wsp=compl",
    "9,h,1000",
    "9,h,30,-r,-Ejb=1,Pss=9",
    "9,h,20,-S,-g",
    "",
])

LOGCAT_DUMP = (
    "--------- beginning of main\n"
    "[ 1700000000.500000  1234: 1250 I/ActivityManager ]\n"
    "Start proc 4321:com.example.app/u0a123\n"
    "\n"
    "[ 1700000001.250000  1234: 1260 W/ActivityManager ]\n"
    "Slow operation: 63ms so far\n"
    "\n"
    "--------- beginning of system\n"
    "[ 1700000002.000000   987:  987 D/PowerManagerService ]\n"
    "Acquiring wake lock\n"
    "\n"
    "this is not a record\n"
    "\n"
    "[ 1700000003.000001  4321: 4321 X/CustomTag ]\n"
    "unknown level\n"
)


class FakeBridge:
    """Stands in for AdbBridge; records what was asked of it."""

    def __init__(self, checkin=CHECKIN_DUMP, logcat=LOGCAT_DUMP, error=None):
        self.checkin = checkin
        self.logcat_text = logcat
        self.error = error
        self.logcat_calls = []
        self.reset_calls = 0

    def _check(self):
        if self.error is not None:
            raise self.error

    def battery_history(self):
        self._check()
        return self.checkin

    def battery_checkin(self):
        self._check()
        return "9,0,i,vers,36,214,TP1A,TP1A\n"

    def battery_verbose(self):
        self._check()
        return "Battery History (1% used):\n"

    def logcat(self, start_time=None):
        self._check()
        self.logcat_calls.append(start_time)
        return self.logcat_text

    def reset(self):
        self._check()
        self.reset_calls += 1
        return "reset done"


@pytest.fixture
def checkin_dump():
    return CHECKIN_DUMP


@pytest.fixture
def logcat_dump():
    return LOGCAT_DUMP


@pytest.fixture
def fake_bridge():
    return FakeBridge()
