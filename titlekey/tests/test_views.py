from django.contrib.auth.models import User
from django.test import Client, TestCase
from django.urls import reverse

from titlekey.registry import search_hooks
from titlekey.views import default_prefix_search
from titlekey.titles import Title

from .helpers import make_page


class SuggestViewTests(TestCase):

    def setUp(self):
        self.client = Client()
        make_page('Apple')
        make_page('Apple2')
        make_page('Banana')
        make_page('Apricot', namespace=1)

    def test_case_insensitive_completion(self):
        response = self.client.get(reverse('title_suggest'), {'search': 'aPP'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), ['aPP', ['Apple', 'Apple2']])

    def test_namespace_parameter(self):
        response = self.client.get(reverse('title_suggest'), {'search': 'ap', 'namespace': '1|5'})
        self.assertEqual(response.json(), ['ap', ['Talk:Apricot']])

    def test_limit_is_clamped(self):
        response = self.client.get(reverse('title_suggest'), {'search': 'a', 'limit': '0'})
        self.assertEqual(response.json(), ['a', ['Apple']])

    def test_bad_integer(self):
        response = self.client.get(reverse('title_suggest'), {'search': 'a', 'limit': 'lots'})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])

    def test_post_rejected(self):
        response = self.client.post(reverse('title_suggest'), {'search': 'a'})
        self.assertEqual(response.status_code, 400)

    def test_default_backend_is_byte_exact(self):
        self.assertEqual(default_prefix_search([0], 'App', 10, 0), [Title(0, 'Apple'), Title(0, 'Apple2')])
        self.assertEqual(default_prefix_search([0], 'app', 10, 0), [Title(0, 'Apple'), Title(0, 'Apple2')])
        self.assertEqual(default_prefix_search([0], 'aPP', 10, 0), [])

    def test_falls_back_to_default_backend(self):
        search_hooks.unregister('titlekey')
        try:
            response = self.client.get(reverse('title_suggest'), {'search': 'Ban'})
            self.assertEqual(response.json(), ['Ban', ['Banana']])
            response = self.client.get(reverse('title_suggest'), {'search': 'bAN'})
            self.assertEqual(response.json(), ['bAN', []])
        finally:
            from titlekey.search import near_match, prefix_search
            search_hooks.register_prefix_backend('titlekey', prefix_search)
            search_hooks.register_near_match('titlekey', near_match)


class GoViewTests(TestCase):

    def setUp(self):
        self.client = Client()
        make_page('McGee', content='Hello')
        make_page('Foo bar', namespace=1)

    def test_exact_page(self):
        response = self.client.get(reverse('title_go'), {'search': 'McGee'})
        self.assertRedirects(response, '/wiki/McGee', fetch_redirect_response=False)

    def test_near_match_redirect(self):
        response = self.client.get(reverse('title_go'), {'search': 'mcgee'})
        self.assertRedirects(response, '/wiki/McGee', fetch_redirect_response=False)

    def test_near_match_other_namespace(self):
        response = self.client.get(reverse('title_go'), {'search': 'talk:FOO BAR'})
        self.assertRedirects(response, '/wiki/Talk:Foo_bar', fetch_redirect_response=False)

    def test_no_match(self):
        response = self.client.get(reverse('title_go'), {'search': 'nonexistentxyz'})
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()['success'])

    def test_empty_term(self):
        response = self.client.get(reverse('title_go'))
        self.assertEqual(response.status_code, 400)

    def test_page_view(self):
        response = self.client.get('/wiki/McGee')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['title'], 'McGee')
        self.assertEqual(data['content'], 'Hello')
        self.assertEqual(self.client.get('/wiki/Nothing_here').status_code, 404)


class AdminTests(TestCase):

    def test_titlekey_changelist_loads(self):
        make_page('Admin visible')
        User.objects.create_superuser('admin', 'admin@example.com', 'password')
        client = Client()
        client.force_login(User.objects.get(username='admin'))
        response = client.get('/admin/titlekey/titlekey/')
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'admin visible')
        response = client.get('/admin/titlekey/page/')
        self.assertEqual(response.status_code, 200)
