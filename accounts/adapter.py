from allauth.account.adapter import DefaultAccountAdapter


class SchoolAccountAdapter(DefaultAccountAdapter):
    """Accounts are provisioned by administrators, CSV import or seeding."""

    def is_open_for_signup(self, request):
        return False
