"""Interactive CLI simulator — walk through the passphrase login without HTTP."""

import asyncio

from passphrase_auth.exceptions import PassphraseAuthError
from passphrase_auth.services.email_service import EmailService
from passphrase_auth.services.otp_manager import OTPLifecycleManager, VerificationOutcome
from passphrase_auth.stores.memory import InMemoryOTPStore

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"


async def main() -> None:
    print(f"\n{BOLD}{'=' * 52}")
    print("  🔑  Passphrase Auth — Simulator")
    print(f"{'=' * 52}{RESET}\n")

    print(f"{DIM}Type 'quit' to exit, 'switch' to change email, 'resend' for a new passphrase{RESET}")
    print(f"{DIM}Without SMTP_HOST set, passphrases also show up in the logs{RESET}\n")

    # In-memory store; EmailService only logs unless SMTP is configured.
    manager = OTPLifecycleManager(store=InMemoryOTPStore(), delivery=EmailService())

    email = input(f"{YELLOW}Email to log in as: {RESET}").strip() or "alice@example.com"
    await _issue(manager, email)

    while True:
        try:
            user_input = input(f"{BLUE}{BOLD}Passphrase:{RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Goodbye!{RESET}")
            break

        if user_input.lower() == "quit":
            print(f"{DIM}Goodbye!{RESET}")
            break

        if user_input.lower() == "switch":
            email = input(f"{YELLOW}New email: {RESET}").strip()
            await _issue(manager, email)
            continue

        if user_input.lower() == "resend":
            await _issue(manager, email)
            continue

        try:
            outcome = await manager.verify_otp(email, user_input)
        except PassphraseAuthError as exc:
            print(f"{RED}{exc.message}{RESET}\n")
            continue

        if outcome is VerificationOutcome.SUCCESS:
            print(f"{GREEN}{BOLD}Login success{RESET} as {email}\n")
        elif outcome is VerificationOutcome.EXPIRED:
            print(f"{RED}The passphrase already expired. Type 'resend'.{RESET}\n")
        else:
            print(f"{RED}Invalid passphrase. Try again.{RESET}\n")


async def _issue(manager: OTPLifecycleManager, email: str) -> None:
    try:
        passphrase = await manager.request_otp(email)
    except PassphraseAuthError as exc:
        print(f"{RED}{exc.message}{RESET}\n")
        return
    print(f"{DIM}Passphrase issued for {email}: {passphrase}{RESET}\n")


if __name__ == "__main__":
    asyncio.run(main())
