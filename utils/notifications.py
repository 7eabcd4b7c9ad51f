"""
Модуль: `utils/notifications.py`.
Назначение: Отправка писем о регистрации и удалении аккаунта после успешной записи в БД.

Доставка выполняется «выстрелил и забыл»: хуки запускаются в пуле потоков,
ошибки только журналируются и никогда не влияют на HTTP-ответ.
"""

import atexit
import smtplib
import ssl
from concurrent.futures import ThreadPoolExecutor
from email.message import EmailMessage

SIGNUP = "signup"
ACCOUNT_DELETED = "account_deleted"


class SmtpMailer:
    """Отправка писем через SMTP-релей транзакционного почтового провайдера."""

    def __init__(self, host, port, sender, username="", password="", use_tls=True, use_ssl=False, timeout=10):
        self.host = (host or "").strip()
        self.port = int(port)
        self.sender = (sender or "").strip()
        self.username = (username or "").strip()
        self.password = password or ""
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg):
        return cls(
            host=cfg.get("SMTP_HOST", ""),
            port=cfg.get("SMTP_PORT", 587),
            sender=cfg.get("SMTP_FROM", ""),
            username=cfg.get("SMTP_USER", ""),
            password=cfg.get("SMTP_PASSWORD", ""),
            use_tls=bool(cfg.get("SMTP_USE_TLS", True)),
            use_ssl=bool(cfg.get("SMTP_USE_SSL", False)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.host and self.sender)

    def send(self, to: str, subject: str, text: str) -> bool:
        if not self.configured:
            return False

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.set_content(text)

        if self.use_ssl:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=ssl.create_default_context()) as client:
                if self.username:
                    client.login(self.username, self.password)
                client.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.use_tls:
                    client.starttls(context=ssl.create_default_context())
                if self.username:
                    client.login(self.username, self.password)
                client.send_message(msg)
        return True


def welcome_email_hook(mailer: SmtpMailer):
    def send_welcome_email(email: str, name: str) -> bool:
        return mailer.send(
            email,
            "Спасибо за регистрацию!",
            f"Здравствуйте, {name}!\nДобро пожаловать в Taskly.\n\nС уважением,\nАдминистрация",
        )

    return send_welcome_email


def cancelation_email_hook(mailer: SmtpMailer):
    def send_cancelation_email(email: str, name: str) -> bool:
        return mailer.send(
            email,
            "Спасибо, что были с нами",
            (
                f"Здравствуйте, {name}!\n"
                "Нам было приятно работать с вами. Если у вас возникли трудности, "
                "пожалуйста, расскажите нам о них.\n\nС уважением,\nАдминистрация"
            ),
        )

    return send_cancelation_email


class Notifier:
    """Реестр хуков, вызываемых после успешного изменения данных."""

    def __init__(self, logger, run_async: bool = True, max_workers: int = 2):
        self._logger = logger
        self._hooks: dict[str, list] = {}
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify") if run_async else None

    def register(self, event: str, hook):
        """Добавляет хук, вызываемый как hook(email, name) при событии `event`."""
        self._hooks.setdefault(event, []).append(hook)

    @property
    def is_async(self) -> bool:
        return self._executor is not None

    def hooks(self, event: str) -> list:
        return list(self._hooks.get(event, []))

    def dispatch(self, event: str, email: str, name: str):
        """Запускает хуки события; в асинхронном режиме не дожидается их завершения."""
        for hook in self.hooks(event):
            if self._executor is None:
                self._run(event, hook, email, name)
            else:
                self._executor.submit(self._run, event, hook, email, name)

    def _run(self, event, hook, email, name):
        try:
            delivered = hook(email, name)
        except Exception:
            self._logger.exception("Не удалось отправить уведомление %s на %s", event, email)
            return
        if delivered is False:
            self._logger.warning("Уведомление %s на %s не доставлено", event, email)

    def shutdown(self):
        """Дожидается отправки поставленных в очередь уведомлений и останавливает пул."""
        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)


def init_notifier(app) -> Notifier:
    """Создаёт уведомитель приложения и регистрирует письма по умолчанию."""
    notifier = Notifier(app.logger, run_async=app.config.get("NOTIFICATIONS_ASYNC", True))
    if notifier.is_async:
        # Пул потоков живёт до завершения процесса
        atexit.register(notifier.shutdown)
    if app.config.get("NOTIFICATIONS_ENABLED", True):
        mailer = SmtpMailer.from_config(app.config)
        notifier.register(SIGNUP, welcome_email_hook(mailer))
        notifier.register(ACCOUNT_DELETED, cancelation_email_hook(mailer))
    app.extensions["notifier"] = notifier
    return notifier
