from enum import Enum


class WishesLimits(int, Enum):
    LATEST = 40
    MOST_COPIED = 20


class UserErrors(str, Enum):
    NOT_FOUND = "Пользователь не найден"
    USERNAME_TAKEN = "Пользователь с таким именем пользователя уже существует"
    EMAIL_TAKEN = "Пользователь с таким адресом электронной почты уже существует"
    ALREADY_EXISTS = "Пользователь с такими данными уже существует"


class AuthErrors(str, Enum):
    INVALID_CREDENTIALS = "Некорректная пара логин и пароль"
    NOT_AUTHENTICATED = "Необходима авторизация"
    INVALID_TOKEN = "Недействительный токен"


class WishErrors(str, Enum):
    NOT_FOUND = "Желание не найдено"
    NOT_OWNER = "Это не ваше желание"
    CANNOT_CHANGE_PRICE = "Нельзя изменить цену: уже собраны средства"
    CANNOT_COPY_OWN = "Нельзя скопировать собственное желание"
    ALREADY_COPIED = "Это желание уже есть в вашем списке"


class OfferErrors(str, Enum):
    NOT_FOUND = "Предложение не найдено"
    OWN_WISH = "Нельзя скинуться на собственное желание"
    ALREADY_RAISED = "Деньги на это желание уже собраны"
    AMOUNT_TOO_LARGE = "Сумма превышает недостающую стоимость подарка"


class WishListsErrors(str, Enum):
    NOT_FOUND = "Вишлист не найден"
    NOT_OWNER = "Это не ваш вишлист"
