# tests/domain/test_ficha_markup.py
from api.application.services.ficha_markup import DEFAULT_SUBTITLE, build_ficha_markup, child_row_count
from api.domain.membro.entities import Filho, Membro


def _linhas_filhos(html: str) -> int:
    if "<tbody>" not in html:
        return 0
    tbody = html.split("<tbody>")[1].split("</tbody>")[0]
    return tbody.count("<tr>")


def test_solteiro_nao_emite_secao_matrimonial():
    html = build_ficha_markup(Membro(name="Maria", estado_civil="Solteiro(a)", nome_conjuge="Nao deveria"))
    assert "Dados Matrimoniais" not in html
    assert "Nao deveria" not in html
    assert "Cônjuge" not in html


def test_casado_emite_secao_matrimonial():
    html = build_ficha_markup(Membro(name="Maria", estado_civil="Casado(a)", nome_conjuge="Joao"))
    assert "Dados Matrimoniais" in html
    assert "Joao" in html


def test_uniao_estavel_emite_secao_matrimonial():
    html = build_ficha_markup(Membro(name="Maria", estado_civil="União Estável", nome_conjuge="Joao"))
    assert "Dados Matrimoniais" in html


def test_certidao_registra_apenas_existencia():
    html = build_ficha_markup(
        Membro(name="Maria", estado_civil="Casado(a)", certidao_casamento="https://storage/x.pdf")
    )
    assert "Anexada" in html
    assert "https://storage/x.pdf" not in html


def test_filhos_minimo_tres_linhas():
    html = build_ficha_markup(Membro(name="Maria", filhos=(Filho(name="Ana"),)))
    assert _linhas_filhos(html) == 3
    assert "Ana" in html


def test_filhos_cinco_itens_cinco_linhas():
    filhos = tuple(Filho(name=f"Filho {i}") for i in range(5))
    html = build_ficha_markup(Membro(name="Maria", filhos=filhos))
    assert _linhas_filhos(html) == 5
    assert "Filhos (Quantidade: 5)" in html


def test_filhos_quantidade_declarada_maior():
    m = Membro(name="Maria", qtde_filhos="4", filhos=(Filho(name="Ana"),))
    assert child_row_count(m) == 4
    html = build_ficha_markup(m)
    assert _linhas_filhos(html) == 4
    assert "Filhos (Quantidade: 4)" in html


def test_sem_filhos_nao_emite_tabela():
    html = build_ficha_markup(Membro(name="Maria"))
    assert "Filhos (" not in html
    assert child_row_count(Membro()) == 3


def test_so_quantidade_declarada_emite_tabela():
    html = build_ficha_markup(Membro(name="Maria", qtde_filhos="2"))
    assert _linhas_filhos(html) == 3


def test_observacoes_so_quando_preenchidas():
    assert "Outras Informações" not in build_ficha_markup(Membro(name="Maria"))
    html = build_ficha_markup(Membro(name="Maria", informacoes="linha 1\nlinha <2>"))
    assert "Outras Informações" in html
    assert "linha 1<br />linha &lt;2&gt;" in html


def test_texto_livre_escapado():
    html = build_ficha_markup(Membro(name='<script>x</script>', origem='Igreja "A"'))
    assert "<script>" not in html
    assert "&lt;script&gt;x&lt;/script&gt;" in html
    assert "Igreja &quot;A&quot;" in html


def test_foto_insegura_vira_sem_foto():
    html = build_ficha_markup(Membro(name="Maria", photo="javascript:alert(1)"))
    assert "javascript:" not in html
    assert "Sem foto" in html


def test_subtitulo_padrao_e_customizado():
    assert DEFAULT_SUBTITLE in build_ficha_markup(Membro(name="Maria"))
    assert "Censo 2026" in build_ficha_markup(Membro(name="Maria"), "Censo 2026")


def test_secoes_fixas_sempre_presentes():
    html = build_ficha_markup(Membro())
    for titulo in (
        "Dados de Registro",
        "Dados Pessoais",
        "Documentos e Contatos",
        "Endereço Residencial",
        "Filiação",
        "Dados Eclesiásticos",
        "Declaração",
    ):
        assert titulo in html
    assert html.count('class="page"') == 1


def test_checkboxes_orfao_e_consentimentos():
    html = build_ficha_markup(Membro(name="Maria", is_orphan=True, autorizacao=True, autorizacao_imagem=False))
    assert '<span class="check">X</span>Sim' in html
    assert '<span class="check">X</span>Declaro que li e concordo com o uso dos meus dados' in html
    assert '<span class="check"></span>Autorizo o uso da minha imagem' in html


def test_registro_tipo_outros():
    html = build_ficha_markup(Membro(registro_tipo="Outros", registro_tipo_outro="Transferencia"))
    assert "Outros: Transferencia" in html


def test_formatacao_de_documentos():
    html = build_ficha_markup(Membro(cpf="12345678901", celular="5511987654321", data_nascimento="1990-05-20"))
    assert "123.456.789-01" in html
    assert "(11) 98765-4321" in html
    assert "20/05/1990" in html
