"""Views for signup, login and logout."""

from django.contrib.auth import views as auth_views
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from server.apps.accounts.exceptions import UserAlreadyExistsError
from server.apps.accounts.forms import EmailLoginForm, SignupForm
from server.apps.accounts.logic.registration import register_user


@require_http_methods(['GET', 'POST'])
def signup(request: HttpRequest) -> HttpResponse:
    """Render and process the signup form."""
    if request.user.is_authenticated:
        return redirect('files:dashboard')

    form = SignupForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            register_user(
                username=form.cleaned_data['username'],
                email=form.cleaned_data['email'],
                password=form.cleaned_data['password'],
            )
        except UserAlreadyExistsError as error:
            form.add_error(error.field, str(error))
        else:
            return redirect('accounts:login')

    return render(request, 'accounts/signup.html', {'form': form})


login = auth_views.LoginView.as_view(
    template_name='accounts/login.html',
    authentication_form=EmailLoginForm,
    redirect_authenticated_user=True,
)

logout = auth_views.LogoutView.as_view()
