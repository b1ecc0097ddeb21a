# tests/domain/test_carteira_markup.py
from datetime import date

from api.application.services.carteira_markup import build_carteira_markup
from api.domain.configuracao.entities import CardSettings
from api.domain.membro.entities import Membro

HOJE = date(2026, 3, 10)
QR = "data:image/png;base64,iVBORw0KGgo="


def _carteira(membro: Membro, qr: str = QR, settings: CardSettings | None = None) -> str:
    return build_carteira_markup(membro, qr, settings or CardSettings(), hoje=HOJE)


def test_cenario_maria_silva():
    html = _carteira(Membro(name="Maria Silva", cpf="12345678901", estado_civil="Solteiro(a)", cargo="membro"))
    assert "Maria Silva" in html
    back = html.split('class="card back"')[1]
    assert "123.456.789-01" in back
    assert "Cônjuge" not in html
    assert "Casamento" not in html


def test_frente_e_verso_numa_folha():
    html = _carteira(Membro(name="Maria"))
    assert html.count('class="card-page"') == 1
    assert 'class="card front"' in html
    assert 'class="card back"' in html


def test_membro_so_com_nome_usa_placeholders():
    html = _carteira(Membro(name="Joao"))
    assert "SEM FOTO" in html
    assert "N/D" in html
    assert "10/03/2026" in html
    assert "Carteira de Membro" in html


def test_titulo_e_cargo_canonicos():
    html = _carteira(Membro(name="Joao", cargo="Presbítero"))
    assert "Carteira de Presbítero" in html
    assert "PRESBÍTERO" in html


def test_membro_desde_e_nascimento_formatados():
    html = _carteira(Membro(name="Ana", created_at="2019-08-01T10:00:00Z", data_nascimento="1985-12-24"))
    assert "01/08/2019" in html
    assert "24/12/1985" in html


def test_texto_livre_escapado():
    html = _carteira(Membro(name='<script>alert("x")</script>', pai='"Pai"'))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&quot;Pai&quot;" in html


def test_foto_insegura_nunca_vira_src():
    for foto in ("javascript:alert(1)", "ftp://x/a.png", "//evil/a.png"):
        html = _carteira(Membro(name="X", photo=foto))
        assert foto not in html
        assert "SEM FOTO" in html


def test_foto_segura_renderizada():
    html = _carteira(Membro(name="X", photo="https://storage.googleapis.com/b/a.png"))
    assert 'src="https://storage.googleapis.com/b/a.png"' in html
    assert "SEM FOTO" not in html


def test_qr_vazio_ou_invalido_deixa_area_vazia():
    for qr in ("", "javascript:alert(1)"):
        html = _carteira(Membro(name="X"), qr=qr)
        assert '<div class="grid-qr-area"></div>' in html
        assert "qr-img" not in html


def test_qr_presente():
    html = _carteira(Membro(name="X"))
    assert f'src="{QR}"' in html


def test_linha_de_endereco_opcional():
    sem = _carteira(Membro(name="X"))
    assert 'class="address"' not in sem
    com = _carteira(
        Membro(name="X"),
        settings=CardSettings(
            location_address1="Rua A, 10",
            location_cep="97000-000",
            president_signature_name="Pr. Fulano",
            president_signature_role="Pastor Presidente",
        ),
    )
    assert "Rua A, 10 - 97000-000" in com
    assert "Pr. Fulano" in com


def test_branding_configuravel():
    html = _carteira(Membro(name="X"), settings=CardSettings(brand_name="Igreja Teste", brand_sub="CENTRO", logo_src=""))
    assert "Igreja Teste" in html
    assert "CENTRO" in html
    assert 'alt="Logo"' not in html
